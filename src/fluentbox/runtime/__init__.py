"""Runtime adapter over the Fluent formatting engine.

Python 3.13+.
"""

from .bundle import MessageBundle, MessageEntry

__all__ = [
    "MessageBundle",
    "MessageEntry",
]
