"""Locale loading package for FluentBox.

Provides the full loading stack: type aliases, the locale table and fallback
graph, resource backends, and the orchestrator.

Submodules:
    types        - PEP 695 type aliases (LocaleCode, MessageId, ResourceId, ...)
    config       - LocaleTable (validated, immutable configuration)
    fallback     - FallbackGraph (chain and closure traversal)
    loading      - ResourceBackend protocol, FileSystemBackend, HttpBackend,
                   LocaleLoadResult, LoadSummary, FallbackInfo
    orchestrator - FluentBox (loading, lookup, clone)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from fluentbox.enums import LoadMethod, LoadStatus
from fluentbox.localization.config import LocaleTable
from fluentbox.localization.fallback import FallbackGraph
from fluentbox.localization.loading import (
    FallbackInfo,
    FileSystemBackend,
    HttpBackend,
    LoadedResource,
    LoadSummary,
    LocaleLoadResult,
    ResourceBackend,
)
from fluentbox.localization.orchestrator import FluentBox
from fluentbox.localization.types import (
    BundleInitializer,
    FTLSource,
    LocaleCode,
    MessageId,
    PathComponent,
    ResourceId,
)

__all__ = [
    # Main orchestrator
    "FluentBox",
    # Configuration
    "LocaleTable",
    "FallbackGraph",
    "LoadMethod",
    # Backend protocol and implementations
    "ResourceBackend",
    "LoadedResource",
    "FileSystemBackend",
    "HttpBackend",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    "LocaleLoadResult",
    # Fallback observability
    "FallbackInfo",
    # Type aliases for user code type annotations
    "BundleInitializer",
    "FTLSource",
    "LocaleCode",
    "MessageId",
    "PathComponent",
    "ResourceId",
]
