"""fluentbox - locale fallback resolution and asynchronous Fluent bundle loading.

Loads the Fluent (FTL) resources of a requested locale and of every locale it
falls back to, concurrently and all-or-nothing, then resolves messages by
cascading through the fallback chain down to the default locale.

Public API:
    FluentBox - Locale loading, cascading lookup and aliasing clones
    MessageBundle - Messages of one locale (wraps ftllexengine.FluentBundle)
    LoadMethod - Resource backend selection ("http", "filesystem")

Exceptions:
    FluentBoxError - Base exception class
    ConfigurationError - Malformed configuration or load() argument
    UnsupportedLocaleError - load() of an undeclared locale
    ResourceFetchError - Resource backend failure
    BundleBuildError - FTL source could not be turned into a bundle

Submodules:
    fluentbox.localization - Locale table, fallback graph, backends, load summaries
    fluentbox.locale_utils - Locale canonicalization
"""

from .enums import LoadMethod
from .errors import (
    BundleBuildError,
    ConfigurationError,
    FluentBoxError,
    ResourceFetchError,
    UnsupportedLocaleError,
)
from .localization import FluentBox
from .runtime import MessageBundle

# Version information - Auto-populated from package metadata
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("fluentbox")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BundleBuildError",
    "ConfigurationError",
    "FluentBox",
    "FluentBoxError",
    "LoadMethod",
    "MessageBundle",
    "ResourceFetchError",
    "UnsupportedLocaleError",
    "__version__",
]
