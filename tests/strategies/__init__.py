"""Hypothesis strategies for fluentbox property-based testing.

Strategies are organized by domain:

- locales: locale spellings, acyclic fallback graphs, message identifiers

Usage:
    from tests.strategies import fallback_graphs, locale_spellings
    from tests.strategies.locales import LOCALE_POOL

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - locale_spellings, fallback_graphs
"""

from .locales import LOCALE_POOL, fallback_graphs, locale_spellings, message_ids

__all__ = [
    "LOCALE_POOL",
    "fallback_graphs",
    "locale_spellings",
    "message_ids",
]
