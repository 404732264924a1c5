"""MessageBundle - single-locale bundle built from fetched FTL resources.

Thin adapter over the external Fluent engine (ftllexengine.FluentBundle).
The engine owns parsing, resolution and formatting; this adapter adds the
lookup contract the loader and resolver rely on: get_message() returns a
MessageEntry that says whether the message carries a renderable value, and
format() appends non-fatal formatting errors to a caller-owned list.

Python 3.13+. External dependency: ftllexengine (Fluent runtime).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ftllexengine import FluentBundle, FluentError, parse_ftl
from ftllexengine.syntax import Junk, Message

from fluentbox.errors import BundleBuildError
from fluentbox.localization.types import FTLSource, LocaleCode, MessageId

if TYPE_CHECKING:
    from fluentbox.localization.loading import LoadedResource

__all__ = ["MessageBundle", "MessageEntry"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MessageEntry:
    """A message defined in a bundle.

    Attributes:
        id: Message identifier
        has_value: False for messages that only define attributes
    """

    id: MessageId
    has_value: bool


class MessageBundle:
    """Fluent messages for one canonical locale.

    Example:
        >>> bundle = MessageBundle("en-US", use_isolating=False)
        >>> bundle.add_resource("hello = Hello, { $name }!")
        0
        >>> bundle.format("hello", {"name": "Anna"})
        'Hello, Anna!'
    """

    __slots__ = ("_bundle", "_entries", "_junk_count", "_locale")

    def __init__(self, locale: LocaleCode, *, use_isolating: bool = True) -> None:
        self._locale = locale
        self._bundle = FluentBundle(locale, use_isolating=use_isolating)
        self._entries: dict[MessageId, MessageEntry] = {}
        self._junk_count = 0

    @classmethod
    def from_resources(
        cls,
        locale: LocaleCode,
        resources: Iterable[LoadedResource],
        *,
        use_isolating: bool = True,
    ) -> MessageBundle:
        """Build a bundle from fetched resources, in order.

        Later resources override messages of earlier ones.

        Raises:
            BundleBuildError: If a resource cannot be parsed at all
        """
        bundle = cls(locale, use_isolating=use_isolating)
        for resource in resources:
            bundle.add_resource(resource.source, source_path=resource.source_path)
        return bundle

    @property
    def locale(self) -> LocaleCode:
        """Canonical locale this bundle was built for."""
        return self._locale

    @property
    def message_ids(self) -> tuple[MessageId, ...]:
        """Identifiers of all messages, in definition order."""
        return tuple(self._entries)

    @property
    def junk_count(self) -> int:
        """Number of unparseable entries skipped while adding resources."""
        return self._junk_count

    def add_resource(self, source: FTLSource, *, source_path: str | None = None) -> int:
        """Parse FTL source and register its messages.

        Recoverable syntax errors become Junk entries: they are logged and
        counted but do not fail the resource.

        Returns:
            Number of Junk entries in this resource

        Raises:
            BundleBuildError: On a critical parse error
        """
        try:
            resource = parse_ftl(source)
            self._bundle.add_resource(source, source_path=source_path)
        except (FluentError, ValueError) as e:
            msg = f"Failed to build {self._locale} bundle from {source_path or '<string>'}: {e}"
            raise BundleBuildError(msg, locale=self._locale, source_path=source_path) from e

        junk_count = 0
        for entry in resource.entries:
            match entry:
                case Message():
                    name = entry.id.name
                    self._entries[name] = MessageEntry(name, entry.value is not None)
                case Junk():
                    # FluentBundle.add_resource already warned about this entry.
                    junk_count += 1
        if junk_count:
            logger.debug(
                "Skipped %d junk entries in %s", junk_count, source_path or "<string>"
            )
        self._junk_count += junk_count
        return junk_count

    def get_message(self, message_id: MessageId) -> MessageEntry | None:
        """Return the message entry, or None if this bundle does not define it."""
        return self._entries.get(message_id)

    def has_message(self, message_id: MessageId) -> bool:
        return message_id in self._entries

    def format(
        self,
        message_id: MessageId,
        args: Mapping[str, Any] | None = None,
        errors: list[Exception] | None = None,
    ) -> str:
        """Format a message value.

        Formatting problems never raise: the engine returns a best-effort
        string and its errors are appended to errors when a list is given.
        A message without a value formats to the empty string.

        Raises:
            KeyError: If the message is not defined in this bundle
        """
        entry = self._entries.get(message_id)
        if entry is None:
            msg = f"Message '{message_id}' not found in {self._locale} bundle"
            raise KeyError(msg)
        if not entry.has_value:
            return ""

        result, format_errors = self._bundle.format_pattern(message_id, args)
        if format_errors:
            logger.warning(
                "Formatting errors for '%s' in %s: %d error(s)",
                message_id,
                self._locale,
                len(format_errors),
            )
            if errors is not None:
                errors.extend(format_errors)
        return result

    def add_function(self, name: str, func: Callable[..., Any]) -> None:
        """Register a custom Fluent function (UPPERCASE name by convention)."""
        self._bundle.add_function(name, func)
        logger.debug("Added custom function %s to %s bundle", name, self._locale)

    def __repr__(self) -> str:
        return f"MessageBundle(locale={self._locale!r}, messages={len(self._entries)})"
