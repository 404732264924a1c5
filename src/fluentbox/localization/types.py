"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating FluentBox call sites.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fluentbox.runtime.bundle import MessageBundle

__all__ = [
    "BundleInitializer",
    "FTLSource",
    "LocaleCode",
    "MessageId",
    "PathComponent",
    "ResourceId",
]

type MessageId = str
"""Identifier for a Fluent message (e.g., 'welcome', 'error-404')."""

type LocaleCode = str
"""Canonical BCP-47 locale identifier (e.g., 'en-US', 'zh-Hant-TW')."""

type PathComponent = str
"""Locale segment appended to the resource source (e.g., 'en-us' in 'res/lang/en-us')."""

type ResourceId = str
"""FTL resource file identifier (e.g., 'main.ftl', 'errors.ftl')."""

type FTLSource = str
"""Raw FTL source text as a Python string."""

type BundleInitializer = Callable[[LocaleCode, MessageBundle], None]
"""Hook run against the requested locale's bundle after each successful load."""
