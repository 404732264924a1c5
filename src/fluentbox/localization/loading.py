"""Resource loading infrastructure for FluentBox.

Provides the protocol for resource backends, the two shipped backends
(filesystem and HTTP), and the result/summary data structures that record
the outcome of one load batch per locale.

Components:
    LoadedResource - One fetched FTL resource
    ResourceBackend - Protocol for asynchronous resource backends
    FileSystemBackend - Disk-based backend with path-traversal prevention
    HttpBackend - httpx-based backend fetching from a base URL
    LocaleLoadResult - Immutable outcome of loading one locale
    LoadSummary - Immutable aggregate of one load batch
    FallbackInfo - Details of a message resolved from a fallback locale

Python 3.13+. External dependency: httpx (HTTP backend).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

import httpx

from fluentbox.constants import DEFAULT_HTTP_TIMEOUT
from fluentbox.enums import LoadStatus
from fluentbox.errors import ResourceFetchError
from fluentbox.localization.types import (
    FTLSource,
    LocaleCode,
    MessageId,
    PathComponent,
    ResourceId,
)

if TYPE_CHECKING:
    from fluentbox.runtime.bundle import MessageBundle

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol and payload
    "ResourceBackend",
    "LoadedResource",
    # Concrete backends
    "FileSystemBackend",
    "HttpBackend",
    # Load result types
    "LocaleLoadResult",
    "LoadSummary",
    # Fallback observability
    "FallbackInfo",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadedResource:
    """FTL source fetched for one locale.

    Attributes:
        resource_id: Resource file name (e.g., 'main.ftl')
        source: Raw FTL text
        source_path: Human-readable origin for diagnostics
    """

    resource_id: ResourceId
    source: FTLSource
    source_path: str | None = None


class ResourceBackend(Protocol):
    """Protocol for fetching the FTL resources of one locale.

    A backend either returns every requested resource or raises; it never
    returns a partial list. The loader treats any exception as a failure of
    that locale, which fails the whole batch.

    Example:
        >>> class DictBackend:
        ...     def __init__(self, data):
        ...         self.data = data
        ...     async def fetch(self, path_component, resource_ids):
        ...         return tuple(
        ...             LoadedResource(rid, self.data[path_component][rid])
        ...             for rid in resource_ids
        ...         )
        ...     def describe_path(self, path_component, resource_id):
        ...         return f"{path_component}/{resource_id}"
    """

    async def fetch(
        self, path_component: PathComponent, resource_ids: Sequence[ResourceId]
    ) -> tuple[LoadedResource, ...]:
        """Fetch resources for a locale path component.

        Args:
            path_component: Locale segment (raw configured spelling)
            resource_ids: Resource file names, in load order

        Returns:
            One LoadedResource per resource_id, same order

        Raises:
            ResourceFetchError: If any resource cannot be delivered
        """
        ...

    def describe_path(self, path_component: PathComponent, resource_id: ResourceId) -> str:
        """Return human-readable location for diagnostics."""
        ...


def _validate_path_component(path_component: PathComponent) -> None:
    if not path_component:
        msg = "Locale path component cannot be empty"
        raise ValueError(msg)
    if ".." in path_component:
        msg = f"Path traversal sequences not allowed in locale: '{path_component}'"
        raise ValueError(msg)
    if "/" in path_component or "\\" in path_component:
        msg = f"Path separators not allowed in locale: '{path_component}'"
        raise ValueError(msg)


def _validate_resource_id(resource_id: ResourceId) -> None:
    stripped = resource_id.strip()
    if stripped != resource_id:
        msg = f"Resource ID contains leading/trailing whitespace: {resource_id!r}"
        raise ValueError(msg)
    if not resource_id:
        msg = "Resource ID cannot be empty"
        raise ValueError(msg)
    if Path(resource_id).is_absolute() or resource_id.startswith(("/", "\\")):
        msg = f"Absolute paths not allowed in resource_id: '{resource_id}'"
        raise ValueError(msg)
    if ".." in resource_id:
        msg = f"Path traversal sequences not allowed in resource_id: '{resource_id}'"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class FileSystemBackend:
    """Reads resources from ``<root>/<path_component>/<resource_id>``.

    Files are read off the event loop with asyncio.to_thread().

    Security:
        Path components and resource ids containing traversal sequences,
        separators (path components only) or absolute paths are rejected,
        and every resolved path is checked against the root directory.

    Attributes:
        root: Directory holding one sub-directory per locale
    """

    root: str
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_resolved_root", Path(self.root).resolve())

    def describe_path(self, path_component: PathComponent, resource_id: ResourceId) -> str:
        return str(Path(self.root) / path_component / resource_id)

    def _resolve(self, path_component: PathComponent, resource_id: ResourceId) -> Path:
        try:
            _validate_path_component(path_component)
            _validate_resource_id(resource_id)
        except ValueError as e:
            raise ResourceFetchError(
                str(e), path_component=path_component, resource_id=resource_id
            ) from e

        full_path = (self._resolved_root / path_component / resource_id).resolve()
        if not full_path.is_relative_to(self._resolved_root):
            msg = (
                "Path traversal detected: resolved path escapes root directory. "
                f"locale='{path_component}', resource_id='{resource_id}'"
            )
            raise ResourceFetchError(msg, path_component=path_component, resource_id=resource_id)
        return full_path

    async def _read(self, path_component: PathComponent, resource_id: ResourceId) -> LoadedResource:
        path = self._resolve(path_component, resource_id)
        try:
            source = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot read {path}: {e}"
            raise ResourceFetchError(
                msg, path_component=path_component, resource_id=resource_id
            ) from e
        logger.debug("Read resource %s (%d chars)", path, len(source))
        return LoadedResource(resource_id, source, str(path))

    async def fetch(
        self, path_component: PathComponent, resource_ids: Sequence[ResourceId]
    ) -> tuple[LoadedResource, ...]:
        resources = []
        for resource_id in resource_ids:
            resources.append(await self._read(path_component, resource_id))
        return tuple(resources)


class HttpBackend:
    """Fetches resources from ``<base_url>/<path_component>/<resource_id>``.

    All resources of one locale are requested concurrently. When no client
    is injected, an httpx.AsyncClient is opened for each fetch() and closed
    afterwards; an injected client is left open for its owner to close.

    Example:
        >>> backend = HttpBackend("https://cdn.example.com/l10n")
        >>> backend.describe_path("en-us", "main.ftl")
        'https://cdn.example.com/l10n/en-us/main.ftl'
    """

    __slots__ = ("_base_url", "_client", "_timeout")

    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def describe_path(self, path_component: PathComponent, resource_id: ResourceId) -> str:
        return f"{self._base_url}/{path_component}/{resource_id}"

    async def _get(
        self, client: httpx.AsyncClient, path_component: PathComponent, resource_id: ResourceId
    ) -> LoadedResource:
        url = self.describe_path(path_component, resource_id)
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            msg = f"Cannot fetch {url}: {e}"
            raise ResourceFetchError(
                msg, path_component=path_component, resource_id=resource_id
            ) from e
        logger.debug("Fetched resource %s (%d bytes)", url, len(response.content))
        return LoadedResource(resource_id, response.text, url)

    async def _fetch_with(
        self,
        client: httpx.AsyncClient,
        path_component: PathComponent,
        resource_ids: Sequence[ResourceId],
    ) -> tuple[LoadedResource, ...]:
        results = await asyncio.gather(
            *(self._get(client, path_component, rid) for rid in resource_ids),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return tuple(results)  # type: ignore[arg-type]

    async def fetch(
        self, path_component: PathComponent, resource_ids: Sequence[ResourceId]
    ) -> tuple[LoadedResource, ...]:
        if self._client is not None:
            return await self._fetch_with(self._client, path_component, resource_ids)
        async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
            return await self._fetch_with(client, path_component, resource_ids)

    def __repr__(self) -> str:
        return f"HttpBackend(base_url={self._base_url!r})"


@dataclass(frozen=True, slots=True)
class LocaleLoadResult:
    """Outcome of fetching and building one locale of a load batch.

    Attributes:
        locale: Canonical locale identifier
        path_component: Path segment used to fetch its resources
        status: SUCCESS, FETCH_ERROR or BUILD_ERROR
        bundle: Built bundle when status is SUCCESS, None otherwise
        error: Exception when the locale failed, None otherwise
    """

    locale: LocaleCode
    path_component: PathComponent
    status: LoadStatus
    bundle: MessageBundle | None = None
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        """Check if the locale loaded successfully."""
        return self.status == LoadStatus.SUCCESS


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of one load() batch.

    Attributes:
        requested_locale: Locale passed to load() (canonical)
        results: One result per locale in the batch
        committed: True if the batch was adopted into the asset table

    Example:
        >>> summary = box.get_load_summary()
        >>> if not summary.committed:
        ...     for result in summary.get_failures():
        ...         print(f"{result.locale}: {result.error}")
    """

    requested_locale: LocaleCode
    results: tuple[LocaleLoadResult, ...]
    committed: bool

    def __repr__(self) -> str:
        return (
            f"LoadSummary(requested={self.requested_locale!r}, "
            f"total={self.total_attempted}, "
            f"failed={len(self.get_failures())}, "
            f"committed={self.committed})"
        )

    @property
    def total_attempted(self) -> int:
        """Number of locales in the batch."""
        return len(self.results)

    @property
    def all_successful(self) -> bool:
        """Check if every locale in the batch loaded."""
        return all(r.is_success for r in self.results)

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Locales in the batch, in result order."""
        return tuple(r.locale for r in self.results)

    def get_failures(self) -> tuple[LocaleLoadResult, ...]:
        """Get all results of locales that failed."""
        return tuple(r for r in self.results if not r.is_success)

    def get_by_locale(self, locale: LocaleCode) -> LocaleLoadResult | None:
        """Get the result for a specific locale."""
        for result in self.results:
            if result.locale == locale:
                return result
        return None


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a locale fallback event.

    Provided to the on_fallback callback when FluentBox resolves a message
    from a locale other than the current one.

    Attributes:
        requested_locale: The current locale the lookup started from
        resolved_locale: The locale whose bundle defined the message
        message_id: The message identifier that was resolved

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"Fallback: {info.message_id} resolved from "
        ...           f"{info.resolved_locale} (requested {info.requested_locale})")
        >>> box = FluentBox(["lv", "en"], default_locale="en", source="res",
        ...                 files=["main.ftl"], on_fallback=log_fallback)
    """

    requested_locale: LocaleCode
    resolved_locale: LocaleCode
    message_id: MessageId
