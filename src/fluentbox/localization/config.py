"""Locale table: validated, immutable engine configuration.

Built once by LocaleTable.build() from user-supplied options. Every locale
string (declared locales, default locale, fallback keys and values) is
canonicalized on the way in; the raw spelling of each declared locale is
kept only as its path component.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from fluentbox.enums import LoadMethod
from fluentbox.errors import ConfigurationError
from fluentbox.locale_utils import canonicalize_locale
from fluentbox.localization.fallback import FallbackGraph
from fluentbox.localization.types import LocaleCode, PathComponent, ResourceId

__all__ = ["LocaleTable", "parse_locale_or_raise"]


def parse_locale_or_raise(value: object) -> LocaleCode:
    """Canonicalize a configured locale, raising ConfigurationError if malformed."""
    try:
        return canonicalize_locale(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        msg = f"{value} is a malformed locale"
        raise ConfigurationError(msg) from e


def _require_sequence(value: object, name: str) -> list[object]:
    # str is iterable but never a valid list of names here
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        msg = f"{name} must be a list"
        raise ConfigurationError(msg)
    return list(value)


@dataclass(frozen=True, slots=True)
class LocaleTable:
    """Static configuration shared by every handle of one engine.

    Attributes:
        locales: Canonical identifiers of the supported locales
        path_components: Canonical identifier -> raw spelling used in paths/URLs
        default_locale: Canonical default locale, terminal fallback of lookups
        fallbacks: Fallback graph over canonical identifiers
        source: Resource root (directory or base URL)
        files: Resource file names loaded for every locale, in order
        clean: True to replace the asset table on each load, False to accumulate
        method: Resource backend kind
    """

    locales: frozenset[LocaleCode]
    path_components: Mapping[LocaleCode, PathComponent]
    default_locale: LocaleCode
    fallbacks: FallbackGraph
    source: str
    files: tuple[ResourceId, ...]
    clean: bool
    method: LoadMethod

    @classmethod
    def build(
        cls,
        locales: Iterable[str],
        *,
        default_locale: str,
        source: str,
        files: Iterable[ResourceId],
        fallbacks: Mapping[str, Iterable[str]] | None = None,
        clean: bool = True,
        method: LoadMethod | str = LoadMethod.HTTP,
    ) -> LocaleTable:
        """Validate raw options and build a table.

        Raises:
            ConfigurationError: If any option has the wrong shape or a locale is malformed
        """
        path_components: dict[LocaleCode, PathComponent] = {}
        for unparsed in _require_sequence(locales, "locales"):
            parsed = parse_locale_or_raise(unparsed)
            # Duplicate spellings collapse; the first one provides the path.
            path_components.setdefault(parsed, str(unparsed))

        if fallbacks is None:
            fallbacks = {}
        if not isinstance(fallbacks, Mapping):
            msg = "fallbacks must map locales to lists"
            raise ConfigurationError(msg)

        edges: dict[LocaleCode, tuple[LocaleCode, ...]] = {}
        for unparsed_key, targets in fallbacks.items():
            key = parse_locale_or_raise(unparsed_key)
            items = _require_sequence(targets, "fallbacks values")
            parsed_targets: list[LocaleCode] = []
            for item in items:
                if not isinstance(item, str):
                    msg = "fallbacks mapping is malformed"
                    raise ConfigurationError(msg)
                parsed_targets.append(parse_locale_or_raise(item))
            edges[key] = tuple(parsed_targets)

        if not isinstance(default_locale, str):
            msg = "default_locale must be a string"
            raise ConfigurationError(msg)
        parsed_default = parse_locale_or_raise(default_locale)

        if not isinstance(source, str):
            msg = "source must be a string"
            raise ConfigurationError(msg)

        file_names: list[ResourceId] = []
        for file_name in _require_sequence(files, "files"):
            if not isinstance(file_name, str):
                msg = f"files entries must be strings, got {type(file_name).__name__}"
                raise ConfigurationError(msg)
            file_names.append(file_name)

        if not isinstance(clean, bool):
            msg = "clean must be a bool"
            raise ConfigurationError(msg)

        try:
            load_method = LoadMethod(method)
        except ValueError as e:
            choices = [m.value for m in LoadMethod]
            msg = f"method must be one of {choices}, got {method!r}"
            raise ConfigurationError(msg) from e

        return cls(
            locales=frozenset(path_components),
            path_components=MappingProxyType(path_components),
            default_locale=parsed_default,
            fallbacks=FallbackGraph.from_mapping(edges),
            source=source,
            files=tuple(file_names),
            clean=clean,
            method=load_method,
        )

    def path_component(self, locale: LocaleCode) -> PathComponent:
        """Return the path component for a canonical locale.

        Fallback locales that were never declared have no configured spelling;
        their canonical identifier is used as the path component.
        """
        return self.path_components.get(locale, locale)

    def supports(self, locale: LocaleCode) -> bool:
        """Check whether a canonical locale was declared."""
        return locale in self.locales
