"""Property-based tests for FluentBox over random fallback graphs.

Each example builds an acyclic fallback graph, places messages in random
locales, optionally breaks some locales, and checks the load and lookup
invariants against that configuration.

Python 3.13+.
"""

from __future__ import annotations

import asyncio

import pytest
from hypothesis import event, given, settings
from hypothesis import strategies as st

from fluentbox import FluentBox
from fluentbox.localization.fallback import FallbackGraph
from tests.helpers.backends import MemoryBackend
from tests.strategies.locales import fallback_graphs, message_ids

_MESSAGE_IDS = ("alpha", "beta", "gamma", "delta")


def _resources(locales: list[str], placement: dict[str, set[str]]) -> dict[str, dict[str, str]]:
    data: dict[str, dict[str, str]] = {}
    for locale in locales:
        lines = [f"{mid} = {mid} from {locale}" for mid in sorted(placement.get(locale, ()))]
        data[locale] = {"main.ftl": "\n".join(lines) + "\n"}
    return data


@st.composite
def scenarios(draw: st.DrawFn) -> dict[str, object]:
    locales, fallbacks = draw(fallback_graphs())
    placement = {
        locale: set(draw(st.lists(st.sampled_from(_MESSAGE_IDS), unique=True)))
        for locale in locales
    }
    failing = set(draw(st.lists(st.sampled_from(locales), unique=True, max_size=2)))
    first = draw(st.sampled_from(locales))
    second = draw(st.sampled_from(locales))
    clean = draw(st.booleans())
    return {
        "locales": locales,
        "fallbacks": fallbacks,
        "placement": placement,
        "failing": failing,
        "first": first,
        "second": second,
        "clean": clean,
    }


def _make(scenario: dict[str, object], failing: set[str]) -> FluentBox:
    locales: list[str] = scenario["locales"]  # type: ignore[assignment]
    backend = MemoryBackend(
        _resources(locales, scenario["placement"]),  # type: ignore[arg-type]
        failing=sorted(failing),
    )
    return FluentBox(
        locales,
        default_locale=locales[-1],
        source="memory",
        files=["main.ftl"],
        fallbacks=scenario["fallbacks"],  # type: ignore[arg-type]
        clean=scenario["clean"],  # type: ignore[arg-type]
        backend=backend,
        use_isolating=False,
    )


def _check_load_atomicity(scenario: dict[str, object]) -> None:
    """A batch containing a failing locale leaves the engine untouched."""
    failing: set[str] = scenario["failing"]  # type: ignore[assignment]
    box = _make(scenario, failing)
    graph = FallbackGraph.from_mapping(scenario["fallbacks"])  # type: ignore[arg-type]

    async def run() -> None:
        first_ok = await box.load(scenario["first"])  # type: ignore[arg-type]
        before_locale = box.current_locale
        before_table = {loc: box.get_bundle(loc) for loc in box.loaded_locales}

        second: str = scenario["second"]  # type: ignore[assignment]
        ok = await box.load(second)
        batch = graph.closure(second)
        event(f"batch_failed={bool(batch & failing)}")

        assert first_ok == (not graph.closure(scenario["first"]) & failing)  # type: ignore[arg-type]
        assert ok == (not batch & failing)
        if ok:
            assert box.current_locale == second
            assert batch <= box.loaded_locales
            if scenario["clean"]:
                assert box.loaded_locales == batch
            else:
                assert set(before_table) <= box.loaded_locales
        else:
            assert box.current_locale == before_locale
            after_table = {loc: box.get_bundle(loc) for loc in box.loaded_locales}
            assert after_table.keys() == before_table.keys()
            assert all(after_table[loc] is before_table[loc] for loc in before_table)

    asyncio.run(run())


class TestLoadProperties:
    """Atomicity and adoption of load batches."""

    @given(scenarios())
    @settings(deadline=None)
    def test_failed_batch_changes_nothing(self, scenario: dict[str, object]) -> None:
        _check_load_atomicity(scenario)


class TestLookupProperties:
    """Cascade invariants of get_message / has_message."""

    @given(scenarios())
    @settings(deadline=None)
    def test_has_message_agrees_with_get_message(self, scenario: dict[str, object]) -> None:
        box = _make(scenario, set())
        asyncio.run(box.load(scenario["second"]))  # type: ignore[arg-type]

        for message_id in _MESSAGE_IDS:
            found = box.get_message(message_id) is not None
            event(f"message_found={found}")
            assert box.has_message(message_id) == found

    @given(scenarios())
    @settings(deadline=None)
    def test_first_locale_in_chain_wins(self, scenario: dict[str, object]) -> None:
        """The resolved value comes from the first chain locale defining the id.

        Only checked when the default locale is outside the chain: a loaded
        default is consulted after each exhausted fallback branch.
        """
        box = _make(scenario, set())
        current: str = scenario["second"]  # type: ignore[assignment]
        placement: dict[str, set[str]] = scenario["placement"]  # type: ignore[assignment]
        asyncio.run(box.load(current))

        chain = box.locale_and_fallbacks
        event(f"default_in_chain={box.default_locale in chain}")
        if box.default_locale in chain:
            return
        for message_id in _MESSAGE_IDS:
            owners = [loc for loc in chain if message_id in placement.get(loc, ())]
            if owners:
                assert box.get_message(message_id) == f"{message_id} from {owners[0]}"

    @given(scenarios(), message_ids())
    def test_nothing_found_before_load(self, scenario: dict[str, object], message_id: str) -> None:
        box = _make(scenario, set())
        assert box.get_message(message_id) is None
        assert not box.has_message(message_id)
        assert box.format_value(message_id)[0] == f"{{{message_id}}}"


@pytest.mark.fuzz
class TestLoadPropertiesIntensive:
    """High-volume atomicity run for dedicated fuzzing sessions."""

    @given(scenarios())
    @settings(max_examples=1000, deadline=None)
    def test_failed_batch_changes_nothing_intensive(self, scenario: dict[str, object]) -> None:
        _check_load_atomicity(scenario)
