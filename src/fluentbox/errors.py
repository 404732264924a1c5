"""Exception hierarchy for fluentbox.

Configuration problems are raised synchronously and are never swallowed.
Fetch and build problems are raised by backends and the bundle adapter, then
captured per locale by the loader so that a failed batch resolves to False.

Python 3.13+.
"""

__all__ = [
    "BundleBuildError",
    "ConfigurationError",
    "FluentBoxError",
    "ResourceFetchError",
    "UnsupportedLocaleError",
]


class FluentBoxError(Exception):
    """Base class for all fluentbox errors."""


class ConfigurationError(FluentBoxError, ValueError):
    """Raised when engine configuration or a load argument is malformed."""


class UnsupportedLocaleError(FluentBoxError, ValueError):
    """Raised by load() when the requested locale was not declared.

    Attributes:
        locale: Canonical form of the rejected locale
    """

    def __init__(self, locale: str) -> None:
        super().__init__(f"Unsupported locale: {locale}")
        self.locale = locale


class ResourceFetchError(FluentBoxError):
    """Raised by a resource backend when a resource cannot be delivered.

    Attributes:
        path_component: Locale path segment that was requested
        resource_id: Resource file name that failed
    """

    def __init__(self, message: str, *, path_component: str, resource_id: str) -> None:
        super().__init__(message)
        self.path_component = path_component
        self.resource_id = resource_id


class BundleBuildError(FluentBoxError):
    """Raised when fetched FTL source cannot be turned into a bundle.

    Attributes:
        locale: Locale the bundle was being built for
        source_path: Human-readable origin of the offending resource
    """

    def __init__(self, message: str, *, locale: str, source_path: str | None = None) -> None:
        super().__init__(message)
        self.locale = locale
        self.source_path = source_path
