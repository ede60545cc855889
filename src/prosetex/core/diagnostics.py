"""Diagnostic channel between the conversion service and its hosts.

The service never prints. It reports warnings, errors and named events to an
emitter chosen by the host: the CLI renders them with Rich, library callers
get either silence or plain :mod:`logging` records.

Known events

`conversion`
: ``lines`` (int), ``duration`` (seconds), optional ``source``.

`file_saved`
: ``path`` of the written LaTeX document.

`file_opened`
: ``path`` and ``characters`` of the loaded input.

`watch_change`
: ``path`` of a watched file that settled after a change.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """What the service needs from a host to report progress and problems."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Discard every diagnostic."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        pass

    def error(self, message: str, exc: BaseException | None = None) -> None:
        pass

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        pass


class LoggingEmitter:
    """Turn diagnostics into records on a standard logger.

    Known events are logged at INFO with their summary, unknown ones at DEBUG
    with their raw payload.
    """

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self.logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.logger.warning(message, exc_info=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.logger.error(message, exc_info=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        summary = format_event_message(name, payload)
        if summary is None:
            self.logger.debug("diagnostic event %s: %s", name, dict(payload))
        else:
            self.logger.info(summary)


def ensure_emitter(emitter: DiagnosticEmitter | None) -> DiagnosticEmitter:
    """Return ``emitter``, or a :class:`NullEmitter` when it is ``None``."""
    return NullEmitter() if emitter is None else emitter


def _path(payload: Mapping[str, Any]) -> str:
    return str(payload.get("path") or "<unknown>")


def _conversion(payload: Mapping[str, Any]) -> str:
    lines = payload.get("lines", 0)
    duration = float(payload.get("duration", 0.0))
    return f"Converted {lines} {'line' if lines == 1 else 'lines'} in {duration:.3f}s"


def _file_opened(payload: Mapping[str, Any]) -> str:
    characters = payload.get("characters")
    size = f" ({characters:,} characters)" if isinstance(characters, int) else ""
    return f"Opened {_path(payload)}{size}"


_FORMATTERS: dict[str, Callable[[Mapping[str, Any]], str]] = {
    "conversion": _conversion,
    "file_saved": lambda payload: f"Saved LaTeX to {_path(payload)}",
    "file_opened": _file_opened,
    "watch_change": lambda payload: f"Change detected in {_path(payload)}",
}


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return the one-line summary of a known event, ``None`` otherwise."""
    formatter = _FORMATTERS.get(name)
    return formatter(payload) if formatter is not None else None


__all__ = [
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "ensure_emitter",
    "format_event_message",
]
