"""Shared constants for fluentbox.

Python 3.13+.
"""

__all__ = [
    "DEFAULT_HTTP_TIMEOUT",
    "FALLBACK_MISSING_MESSAGE",
]

# Seconds before an HTTP resource request is abandoned.
DEFAULT_HTTP_TIMEOUT: float = 30.0

# Readable placeholder returned by format_value() for unknown messages,
# matching the Fluent convention of rendering "{message-id}".
FALLBACK_MISSING_MESSAGE: str = "{{{id}}}"
