"""Locale loading and cascading message lookup.

Implements FluentBox: the engine that turns a requested locale into a loaded
set of bundles and answers message lookups against them.

Key architectural decisions:
- Static configuration lives in an immutable LocaleTable built at construction
- Mutable state (asset table, current locale, initializers) lives in one
  shared _Catalog; clone() hands out a new handle over the same _Catalog
- load() fans out one fetch+build task per locale of the batch and commits
  only when every task succeeded (all-or-nothing)
- Protocol-based ResourceBackend (dependency inversion)

Load Behavior:
    load() validates its argument synchronously and raises for configuration
    problems or unsupported locales. Everything after that runs inside the
    returned awaitable, which never raises for fetch or parse failures: it
    resolves to False and leaves the asset table and current locale exactly
    as they were. Per-locale diagnostics for the last batch are available
    from get_load_summary():

        box = FluentBox(["en", "de"], default_locale="en", source="res",
                        files=["main.ftl"], method="filesystem")
        if not await box.load("de"):
            for result in box.get_load_summary().get_failures():
                print(result.locale, result.error)

Concurrency:
    All state changes happen on the event loop thread. Two load() calls that
    race are not serialized: whichever commits last wins. Callers needing
    exclusivity must serialize load() themselves.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

from fluentbox.constants import FALLBACK_MISSING_MESSAGE
from fluentbox.enums import LoadMethod, LoadStatus
from fluentbox.errors import ConfigurationError, UnsupportedLocaleError
from fluentbox.locale_utils import is_well_formed_locale
from fluentbox.localization.config import LocaleTable, parse_locale_or_raise
from fluentbox.localization.loading import (
    FallbackInfo,
    FileSystemBackend,
    HttpBackend,
    LoadSummary,
    LocaleLoadResult,
    ResourceBackend,
)
from fluentbox.localization.types import BundleInitializer, LocaleCode, MessageId, ResourceId
from fluentbox.runtime.bundle import MessageBundle

__all__ = ["FluentBox"]

logger = logging.getLogger(__name__)

# Keyword names accepted by FluentBox.from_mapping().
_OPTION_NAMES: frozenset[str] = frozenset({
    "locales",
    "default_locale",
    "source",
    "files",
    "fallbacks",
    "clean",
    "method",
    "backend",
    "use_isolating",
    "on_fallback",
})
_REQUIRED_OPTIONS: tuple[str, ...] = ("locales", "default_locale", "source", "files")


def _create_backend(method: LoadMethod, source: str) -> ResourceBackend:
    match method:
        case LoadMethod.FILE_SYSTEM:
            return FileSystemBackend(source)
        case LoadMethod.HTTP:
            return HttpBackend(source)


class _Catalog:
    """State block shared by every handle of one engine."""

    __slots__ = (
        "assets",
        "backend",
        "current_locale",
        "initializers",
        "last_summary",
        "on_fallback",
        "table",
        "use_isolating",
    )

    def __init__(
        self,
        table: LocaleTable,
        backend: ResourceBackend,
        *,
        use_isolating: bool,
        on_fallback: Callable[[FallbackInfo], None] | None,
    ) -> None:
        self.table = table
        self.backend = backend
        self.use_isolating = use_isolating
        self.on_fallback = on_fallback
        self.assets: dict[LocaleCode, MessageBundle] = {}
        self.current_locale: LocaleCode | None = None
        self.initializers: list[BundleInitializer] = []
        self.last_summary: LoadSummary | None = None


class FluentBox:
    """Loads locales with their fallbacks and resolves messages across them.

    Example - Filesystem resources under res/lang/<locale>/:
        >>> box = FluentBox(
        ...     ["en-US", "pt-BR", "pt-PT"],
        ...     default_locale="en-US",
        ...     fallbacks={"pt-BR": ["pt-PT"]},
        ...     source="res/lang",
        ...     files=["_.ftl", "errors.ftl"],
        ...     method="filesystem",
        ... )
        >>> await box.load("pt-BR")
        True
        >>> box.get_message("hello", {"name": "Ana"})
        'Olá, Ana!'

    Example - Per-request views in a server:
        >>> box = FluentBox([...], clean=False, ...)
        >>> view = box.clone()  # shares the asset table with box
    """

    __slots__ = ("_catalog",)

    def __init__(
        self,
        locales: Iterable[str],
        *,
        default_locale: str,
        source: str,
        files: Iterable[ResourceId],
        fallbacks: Mapping[str, Iterable[str]] | None = None,
        clean: bool = True,
        method: LoadMethod | str = LoadMethod.HTTP,
        backend: ResourceBackend | None = None,
        use_isolating: bool = True,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Validate configuration and create an engine with nothing loaded.

        Args:
            locales: Supported locales; their spellings become path components
            default_locale: Terminal fallback of every lookup
            source: Resource root: a directory or a base URL, depending on method
            files: Resource file names loaded for each locale, in order
            fallbacks: Locale -> ordered list of its direct fallbacks
            clean: True discards previously loaded bundles on each load;
                   False keeps them (suited to servers handling many locales)
            method: "http" or "filesystem"; selects the resource backend
            backend: Explicit resource backend, overriding method
            use_isolating: Wrap placeables in Unicode bidi isolation marks
            on_fallback: Called when get_message() resolves a message from a
                         locale other than the current one

        Raises:
            ConfigurationError: If any option is malformed
        """
        table = LocaleTable.build(
            locales,
            default_locale=default_locale,
            source=source,
            files=files,
            fallbacks=fallbacks,
            clean=clean,
            method=method,
        )
        if backend is None:
            backend = _create_backend(table.method, table.source)
        if on_fallback is not None and not callable(on_fallback):
            msg = "on_fallback must be callable"
            raise ConfigurationError(msg)

        self._catalog = _Catalog(
            table, backend, use_isolating=use_isolating, on_fallback=on_fallback
        )
        logger.info(
            "FluentBox initialized: %d locales, default=%s, method=%s, clean=%s",
            len(table.locales),
            table.default_locale,
            table.method,
            table.clean,
        )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> FluentBox:
        """Create an engine from an options mapping (e.g., parsed JSON or TOML).

        Keys are the keyword names of the constructor.

        Raises:
            ConfigurationError: If options is not a mapping, has unknown or
                missing keys, or holds malformed values
        """
        if not isinstance(options, Mapping):
            msg = "Invalid options argument"
            raise ConfigurationError(msg)
        unknown = sorted(set(options) - _OPTION_NAMES)
        if unknown:
            msg = f"Unknown options: {', '.join(map(str, unknown))}"
            raise ConfigurationError(msg)
        missing = [name for name in _REQUIRED_OPTIONS if name not in options]
        if missing:
            msg = f"Missing required options: {', '.join(missing)}"
            raise ConfigurationError(msg)
        kwargs = dict(options)
        locales = kwargs.pop("locales")
        return cls(locales, **kwargs)

    @classmethod
    def _from_catalog(cls, catalog: _Catalog) -> FluentBox:
        instance = cls.__new__(cls)
        instance._catalog = catalog
        return instance

    # ------------------------------------------------------------------
    # Configuration accessors
    # ------------------------------------------------------------------

    @property
    def locales(self) -> frozenset[LocaleCode]:
        """Canonical identifiers of the supported locales."""
        return self._catalog.table.locales

    @property
    def default_locale(self) -> LocaleCode:
        return self._catalog.table.default_locale

    @property
    def source(self) -> str:
        return self._catalog.table.source

    @property
    def files(self) -> tuple[ResourceId, ...]:
        return self._catalog.table.files

    @property
    def clean(self) -> bool:
        """True if each load replaces the asset table, False if it accumulates."""
        return self._catalog.table.clean

    @property
    def method(self) -> LoadMethod:
        return self._catalog.table.method

    @property
    def backend(self) -> ResourceBackend:
        return self._catalog.backend

    def supports_locale(self, locale: str) -> bool:
        """Check whether a locale, in any spelling, was declared as supported.

        Malformed locale strings are simply unsupported.
        """
        if not is_well_formed_locale(locale):
            return False
        return self._catalog.table.supports(parse_locale_or_raise(locale))

    def add_bundle_initializer(self, fn: BundleInitializer) -> None:
        """Register a hook run after each successful load.

        The hook receives the requested locale and its bundle (never a
        fallback bundle), typically to install custom functions:

            >>> box.add_bundle_initializer(
            ...     lambda locale, bundle: bundle.add_function("UPPER", str.upper)
            ... )

        Initializers are shared with every clone and run in registration order.
        """
        if not callable(fn):
            msg = f"Bundle initializer must be callable, got {type(fn).__name__}"
            raise TypeError(msg)
        self._catalog.initializers.append(fn)

    # ------------------------------------------------------------------
    # Current locale
    # ------------------------------------------------------------------

    @property
    def current_locale(self) -> LocaleCode | None:
        """Locale of the last successful load, or None before any."""
        return self._catalog.current_locale

    @property
    def locale_and_fallbacks(self) -> tuple[LocaleCode, ...]:
        """Current locale followed by its fallback chain; empty if none loaded."""
        current = self._catalog.current_locale
        if current is None:
            return ()
        return self._catalog.table.fallbacks.chain(current)

    @property
    def fallbacks(self) -> tuple[LocaleCode, ...]:
        """Fallback chain of the current locale; empty if none loaded."""
        current = self._catalog.current_locale
        if current is None:
            return ()
        return self._catalog.table.fallbacks.fallbacks(current)

    @property
    def loaded_locales(self) -> frozenset[LocaleCode]:
        """Locales that currently have a bundle in the asset table."""
        return frozenset(self._catalog.assets)

    def get_bundle(self, locale: str) -> MessageBundle | None:
        """Return the loaded bundle of a locale, bypassing the fallback cascade."""
        if not is_well_formed_locale(locale):
            return None
        return self._catalog.assets.get(parse_locale_or_raise(locale))

    def get_load_summary(self) -> LoadSummary | None:
        """Per-locale outcome of the most recent load batch, committed or not."""
        return self._catalog.last_summary

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, locale: str | None = None) -> Awaitable[bool]:
        """Load a locale together with every locale it falls back to.

        Argument checks run immediately, before anything is fetched. The
        returned awaitable fetches all locales of the batch concurrently and
        resolves to True once they are committed, or to False if any of them
        failed (nothing is committed in that case).

        Args:
            locale: Locale to load, in any spelling; None loads the default

        Returns:
            Awaitable resolving to True on success, False on failure

        Raises:
            ConfigurationError: If no locale is given and no default exists,
                or if locale is not a well-formed locale string
            UnsupportedLocaleError: If the locale was not declared
        """
        table = self._catalog.table
        if locale is None:
            if not table.default_locale:
                msg = "No locale given and no default locale configured"
                raise ConfigurationError(msg)
            requested = table.default_locale
        elif isinstance(locale, str):
            requested = parse_locale_or_raise(locale)
        else:
            msg = f"Locale argument must be a string, got {type(locale).__name__}"
            raise ConfigurationError(msg)

        if not table.supports(requested):
            raise UnsupportedLocaleError(requested)

        return self._load_batch(requested)

    async def _load_batch(self, requested: LocaleCode) -> bool:
        catalog = self._catalog
        batch = sorted(catalog.table.fallbacks.closure(requested))
        logger.debug("Loading %s with batch %s", requested, batch)

        results: list[LocaleLoadResult] = await asyncio.gather(
            *(self._load_single_locale(locale) for locale in batch)
        )

        failures = [r.locale for r in results if not r.is_success]
        if failures:
            catalog.last_summary = LoadSummary(requested, tuple(results), committed=False)
            logger.warning(
                "Load of %s rejected: %d of %d locales failed (%s)",
                requested,
                len(failures),
                len(results),
                ", ".join(failures),
            )
            return False

        # No await below this point: the commit is not interleaved with other loads.
        if catalog.table.clean:
            catalog.assets.clear()
        for result in results:
            catalog.assets[result.locale] = result.bundle  # type: ignore[assignment]
        catalog.current_locale = requested
        catalog.last_summary = LoadSummary(requested, tuple(results), committed=True)
        logger.info(
            "Loaded %s (%d locales, %s policy)",
            requested,
            len(results),
            "clean" if catalog.table.clean else "accumulate",
        )

        bundle = catalog.assets[requested]
        for initializer in tuple(catalog.initializers):
            logger.debug("Running bundle initializer %r for %s", initializer, requested)
            initializer(requested, bundle)
        return True

    async def _load_single_locale(self, locale: LocaleCode) -> LocaleLoadResult:
        """Fetch and build one locale.

        Never raises: any exception from the backend or the bundle builder
        becomes a failed LocaleLoadResult, so one bad locale cannot abort the
        gather in _load_batch.
        """
        catalog = self._catalog
        path_component = catalog.table.path_component(locale)
        try:
            resources = await catalog.backend.fetch(path_component, catalog.table.files)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning(
                "Failed to fetch resources for %s (path component %r): %s",
                locale,
                path_component,
                e,
            )
            return LocaleLoadResult(locale, path_component, LoadStatus.FETCH_ERROR, error=e)

        try:
            bundle = MessageBundle.from_resources(
                locale, resources, use_isolating=catalog.use_isolating
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Failed to build bundle for %s: %s", locale, e)
            return LocaleLoadResult(locale, path_component, LoadStatus.BUILD_ERROR, error=e)

        return LocaleLoadResult(locale, path_component, LoadStatus.SUCCESS, bundle=bundle)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_message(
        self,
        message_id: MessageId,
        args: Mapping[str, Any] | None = None,
        errors: list[Exception] | None = None,
    ) -> str | None:
        """Format a message from the current locale or the first locale that has it.

        Lookup order: current locale, then its fallbacks (each followed by
        its own fallbacks), then the default locale.

        Args:
            message_id: Message identifier
            args: Variables for the message pattern
            errors: Caller-owned list receiving non-fatal formatting errors

        Returns:
            Formatted message, or None if no locale defines message_id
        """
        current = self._catalog.current_locale
        if current is None:
            return None

        found = self._get_message_by_locale(message_id, current, args, errors)
        if found is None:
            return None

        result, resolved_locale = found
        on_fallback = self._catalog.on_fallback
        if on_fallback is not None and resolved_locale != current:
            on_fallback(FallbackInfo(current, resolved_locale, message_id))
        return result

    def _get_message_by_locale(
        self,
        message_id: MessageId,
        locale: LocaleCode,
        args: Mapping[str, Any] | None,
        errors: list[Exception] | None,
    ) -> tuple[str, LocaleCode] | None:
        catalog = self._catalog
        bundle = catalog.assets.get(locale)
        if bundle is not None and bundle.get_message(message_id) is not None:
            logger.debug("Resolved '%s' from %s", message_id, locale)
            return bundle.format(message_id, args, errors), locale

        for fallback in catalog.table.fallbacks.direct(locale):
            found = self._get_message_by_locale(message_id, fallback, args, errors)
            if found is not None:
                return found

        default = catalog.table.default_locale
        if default and locale.lower() != default.lower():
            return self._get_message_by_locale(message_id, default, args, errors)
        return None

    def has_message(self, message_id: MessageId) -> bool:
        """Check whether any locale in the lookup cascade defines message_id."""
        current = self._catalog.current_locale
        if current is None:
            return False
        return self._has_message_by_locale(message_id, current)

    def _has_message_by_locale(self, message_id: MessageId, locale: LocaleCode) -> bool:
        catalog = self._catalog
        bundle = catalog.assets.get(locale)
        if bundle is not None and bundle.has_message(message_id):
            return True

        for fallback in catalog.table.fallbacks.direct(locale):
            if self._has_message_by_locale(message_id, fallback):
                return True

        default = catalog.table.default_locale
        if default and locale.lower() != default.lower():
            return self._has_message_by_locale(message_id, default)
        return False

    def format_value(
        self, message_id: MessageId, args: Mapping[str, Any] | None = None
    ) -> tuple[str, tuple[Exception, ...]]:
        """Format a message, returning (result, errors) like the Fluent engine.

        Unknown messages render as "{message_id}" with a KeyError in errors.
        """
        errors: list[Exception] = []
        result = self.get_message(message_id, args, errors)
        if result is None:
            errors.append(KeyError(f"Message '{message_id}' not found in any locale"))
            return FALLBACK_MISSING_MESSAGE.format(id=message_id), tuple(errors)
        return result, tuple(errors)

    # ------------------------------------------------------------------
    # Aliasing
    # ------------------------------------------------------------------

    def clone(self) -> FluentBox:
        """Return a handle sharing all state with this one.

        Loads and initializers registered through either handle are visible
        through both. This is aliasing, not a copy.
        """
        return FluentBox._from_catalog(self._catalog)

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> repr(box)
            "FluentBox(current_locale='en-US', loaded=2/3)"
        """
        catalog = self._catalog
        return (
            f"FluentBox(current_locale={catalog.current_locale!r}, "
            f"loaded={len(catalog.assets)}/{len(catalog.table.locales)})"
        )
