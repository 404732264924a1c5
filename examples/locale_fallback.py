"""FluentBox Example - Loading Locales with Fallback Chains.

Demonstrates loading a locale together with its fallbacks from disk,
cascading lookup down to the default locale, and failed loads that leave
the previously loaded locale in place.

Scenarios covered:
1. Brazilian Portuguese falling back to European Portuguese, then English
2. Custom functions installed by a bundle initializer
3. A broken locale: load() resolves to False, nothing changes
4. Per-request views with clone() on a server

WARNING: Examples use use_isolating=False for cleaner terminal output.
Keep the default use_isolating=True in applications that support RTL languages.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path

from fluentbox import FluentBox, MessageBundle

RESOURCES = {
    "en-us": "hello = Hello, { $name }!\ncart = Cart\ncheckout = Checkout\n",
    "pt-pt": "hello = Olá, { $name }!\ncart = Carrinho\n",
    "pt-br": "hello = Oi, { $name }!\n",
    "de": "hello = Hallo, { $name }!\n",
}


def write_resources(root: Path) -> None:
    for component, source in RESOURCES.items():
        (root / component).mkdir()
        (root / component / "main.ftl").write_text(source, encoding="utf-8")


async def example_1_fallback_chain(root: Path) -> None:
    """Example 1: pt-BR -> pt-PT -> en-US (default)."""
    print("=" * 60)
    print("Example 1: Fallback chain (pt-BR -> pt-PT -> en-US)")
    print("=" * 60)

    box = FluentBox(
        ["en-us", "pt-br", "pt-pt", "de"],
        default_locale="en-us",
        fallbacks={"pt-br": ["pt-pt"], "pt-pt": ["en-us"]},
        source=str(root),
        files=["main.ftl"],
        method="filesystem",
        use_isolating=False,
    )

    print(f"Loaded: {await box.load('pt-BR')}")
    print(f"Chain: {box.locale_and_fallbacks}")
    print(box.get_message("hello", {"name": "Ana"}))  # pt-BR
    print(box.get_message("cart"))  # pt-PT
    print(box.get_message("checkout"))  # en-US
    print(box.get_message("missing"))  # None
    print()


async def example_2_initializer(root: Path) -> None:
    """Example 2: Custom function added to every freshly loaded bundle."""
    print("=" * 60)
    print("Example 2: Bundle initializer")
    print("=" * 60)

    def install_functions(locale: str, bundle: MessageBundle) -> None:
        print(f"Initializing {locale} bundle ({len(bundle.message_ids)} messages)")
        bundle.add_function("SHOUT", lambda value: str(value).upper())

    box = FluentBox(
        ["en-us"],
        default_locale="en-us",
        source=str(root),
        files=["main.ftl"],
        method="filesystem",
        use_isolating=False,
    )
    box.add_bundle_initializer(install_functions)
    await box.load()
    print()


async def example_3_failed_load(root: Path) -> None:
    """Example 3: A locale with missing files never replaces the current one."""
    print("=" * 60)
    print("Example 3: Failed load")
    print("=" * 60)

    box = FluentBox(
        ["en-us", "fr"],
        default_locale="en-us",
        source=str(root),
        files=["main.ftl"],
        method="filesystem",
        use_isolating=False,
    )
    await box.load("en-US")
    ok = await box.load("fr")  # there is no fr/ directory
    print(f"fr loaded: {ok}, current locale still {box.current_locale}")

    summary = box.get_load_summary()
    if summary is not None:
        for result in summary.get_failures():
            print(f"  {result.locale}: {result.status} - {result.error}")
    print()


async def example_4_server_views(root: Path) -> None:
    """Example 4: Accumulating catalog shared by per-request handles."""
    print("=" * 60)
    print("Example 4: clone() on a server")
    print("=" * 60)

    catalog = FluentBox(
        ["en-us", "de"],
        default_locale="en-us",
        source=str(root),
        files=["main.ftl"],
        clean=False,
        method="filesystem",
        use_isolating=False,
    )
    await catalog.load("de")
    await catalog.load("en-US")

    view = catalog.clone()
    print(f"Loaded locales: {sorted(view.loaded_locales)}")
    german = view.get_bundle("de")
    if german is not None:
        print(german.format("hello", {"name": "Jonas"}))
    print()


async def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        write_resources(root)
        await example_1_fallback_chain(root)
        await example_2_initializer(root)
        await example_3_failed_load(root)
        await example_4_server_views(root)


if __name__ == "__main__":
    asyncio.run(main())
