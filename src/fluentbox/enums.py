"""Enumerations for fluentbox type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.

Python 3.13+.
"""

from enum import StrEnum


class LoadMethod(StrEnum):
    """Resource backend used to fetch FTL resources.

    StrEnum provides automatic string conversion: str(LoadMethod.HTTP) == "http"
    """

    HTTP = "http"
    """Fetch resources over HTTP(S) relative to a base URL."""

    FILE_SYSTEM = "filesystem"
    """Read resources from a directory on disk."""

    @classmethod
    def _missing_(cls, value: object) -> "LoadMethod | None":
        # Accept the camel-case spelling used by JavaScript configurations.
        if isinstance(value, str) and value.lower() == "filesystem":
            return cls.FILE_SYSTEM
        return None


class LoadStatus(StrEnum):
    """Outcome of loading a single locale within a load batch.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """All resources fetched and the bundle was built."""

    FETCH_ERROR = "fetch_error"
    """The resource backend failed to deliver one or more resources."""

    BUILD_ERROR = "build_error"
    """Resources were fetched but the bundle could not be built."""


__all__ = [
    "LoadMethod",
    "LoadStatus",
]
