"""Locale utilities for BCP-47 canonicalization.

Centralizes locale normalization used throughout the codebase. Every locale
that enters fluentbox is canonicalized at the boundary with
canonicalize_locale(); tables, fallback graphs and lookups only ever see the
canonical form.

Python 3.13+. External dependency: Babel (syntactic locale parsing).
"""

from __future__ import annotations

import functools
import re

from babel.core import parse_locale

__all__ = [
    "canonicalize_locale",
    "is_well_formed_locale",
    "normalize_locale",
]

# Extension and private-use sequences after the language/script/region/variant
# part: singleton subtags ("u", "t", ...) take 2-8 character subtags, "x" takes
# 1-8 character subtags and must come last.
_EXTENSIONS_PATTERN = re.compile(
    r"(?:[0-9a-wy-z](?:-[0-9a-z]{2,8})+)*(?:x(?:-[0-9a-z]{1,8})+)?"
)


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 locale code to POSIX separators for Babel.

    Example:
        >>> normalize_locale("en-US")
        'en_US'
    """
    return locale_code.replace("-", "_")


def _malformed(locale_code: str) -> ValueError:
    return ValueError(f"Malformed locale code: {locale_code!r}")


@functools.lru_cache(maxsize=256)
def canonicalize_locale(locale_code: str) -> str:
    """Return the canonical BCP-47 identifier for a locale spelling.

    Parsing is purely syntactic: the locale does not have to exist in CLDR.
    Hyphen and underscore separators are both accepted. The result uses
    hyphens, a lower-case language, a title-case script, an upper-case
    region and lower-case variant and extension subtags, so different
    spellings of the same locale compare equal.

    Extension (``-u-``, ``-t-``, ...) and private-use (``-x-``) sequences
    are kept in their original order; their subtags are not sorted.

    Args:
        locale_code: Locale spelling (e.g., "en-us", "EN_US", "zh-hant-tw")

    Returns:
        Canonical identifier (e.g., "en-US", "zh-Hant-TW")

    Raises:
        ValueError: If locale_code is not a string or is not a well-formed locale

    Example:
        >>> canonicalize_locale("en-us")
        'en-US'
        >>> canonicalize_locale("sr_latn_rs")
        'sr-Latn-RS'
        >>> canonicalize_locale("ca_ES_VALENCIA")
        'ca-ES-valencia'
        >>> canonicalize_locale("de-DE-U-CO-phonebk")
        'de-DE-u-co-phonebk'
    """
    if not isinstance(locale_code, str):
        msg = f"Locale code must be a string, got {type(locale_code).__name__}"
        raise ValueError(msg)

    stripped = locale_code.strip()
    if not stripped or stripped != locale_code:
        raise _malformed(locale_code)

    # Encoding and modifier suffixes are POSIX-only; reject them rather than
    # letting parse_locale drop them silently.
    if "." in locale_code or "@" in locale_code:
        raise _malformed(locale_code)

    subtags = normalize_locale(locale_code).split("_")
    if not all(subtags):
        raise _malformed(locale_code)

    # Babel knows nothing about extensions: split them off at the first
    # singleton subtag and validate them separately.
    split_at = next(
        (i for i, subtag in enumerate(subtags) if i > 0 and len(subtag) == 1),
        len(subtags),
    )
    extensions = "-".join(subtags[split_at:]).lower()
    if extensions and not _EXTENSIONS_PATTERN.fullmatch(extensions):
        raise _malformed(locale_code)

    parts = parse_locale("_".join(subtags[:split_at]))
    language, territory, script, variant = parts[:4]
    # Babel upper-cases variants; BCP-47 spells them in lower case.
    if variant:
        variant = variant.lower()
    return "-".join(
        part for part in (language, script, territory, variant, extensions) if part
    )


def is_well_formed_locale(locale_code: object) -> bool:
    """Check whether a value can be canonicalized as a locale."""
    try:
        canonicalize_locale(locale_code)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False
    return True
