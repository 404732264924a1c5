"""Fallback graph traversal.

A fallback graph maps a canonical locale to the ordered list of locales that
are consulted when a message is missing from it. Fallbacks have fallbacks of
their own, so both traversals below recurse depth-first, left-to-right.

The graph is not checked for cycles. Callers must supply an acyclic graph; a
cycle makes chain() and closure() recurse until RecursionError.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from fluentbox.localization.types import LocaleCode

__all__ = ["FallbackGraph"]


@dataclass(frozen=True, slots=True)
class FallbackGraph:
    """Immutable mapping from locale to its direct fallbacks.

    Example:
        >>> graph = FallbackGraph.from_mapping({"pt-BR": ["pt-PT"], "pt-PT": ["en"]})
        >>> graph.chain("pt-BR")
        ('pt-BR', 'pt-PT', 'en')
        >>> sorted(graph.closure("pt-BR"))
        ['en', 'pt-BR', 'pt-PT']
    """

    edges: Mapping[LocaleCode, tuple[LocaleCode, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[LocaleCode, tuple[LocaleCode, ...] | list[LocaleCode]]
    ) -> FallbackGraph:
        """Build a graph from already-canonical locale identifiers."""
        frozen = {locale: tuple(targets) for locale, targets in mapping.items()}
        return cls(edges=MappingProxyType(frozen))

    def direct(self, locale: LocaleCode) -> tuple[LocaleCode, ...]:
        """Return the declared fallbacks of a locale (empty if none)."""
        return self.edges.get(locale, ())

    def chain(self, locale: LocaleCode) -> tuple[LocaleCode, ...]:
        """Return locale followed by its fallbacks in depth-first order.

        Duplicates reachable through several paths are kept, mirroring the
        order in which the message resolver visits them.
        """
        output: list[LocaleCode] = [locale]
        self._enumerate(locale, output)
        return tuple(output)

    def fallbacks(self, locale: LocaleCode) -> tuple[LocaleCode, ...]:
        """Return only the fallbacks of locale, in chain() order."""
        output: list[LocaleCode] = []
        self._enumerate(locale, output)
        return tuple(output)

    def closure(self, locale: LocaleCode) -> frozenset[LocaleCode]:
        """Return locale plus every locale reachable from it, deduplicated.

        This is the batch of locales one load() call has to fetch.
        """
        output: set[LocaleCode] = {locale}
        self._enumerate_to_set(locale, output)
        return frozenset(output)

    def _enumerate(self, locale: LocaleCode, output: list[LocaleCode]) -> None:
        for item in self.direct(locale):
            output.append(item)
            self._enumerate(item, output)

    def _enumerate_to_set(self, locale: LocaleCode, output: set[LocaleCode]) -> None:
        for item in self.direct(locale):
            output.add(item)
            self._enumerate_to_set(item, output)

    def __len__(self) -> int:
        return len(self.edges)
