"""Exception hierarchy for the prosetex host layer.

The text transforms themselves never raise: malformed markup degrades into
unbalanced output. Only collaborators (configuration, file persistence) fail.
"""

from __future__ import annotations


class ProsetexError(RuntimeError):
    """Base exception for prosetex failures."""


class ConfigError(ProsetexError):
    """Raised when a configuration file cannot be read or validated."""


class DocumentIOError(ProsetexError):
    """Raised when a document cannot be persisted or loaded."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ConfigError",
    "DocumentIOError",
    "ProsetexError",
    "exception_hint",
    "exception_messages",
]
