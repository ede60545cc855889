"""Per-invocation CLI state: verbosity, configuration, consoles and events.

Each Typer invocation stores a :class:`CLIState` on its click context. Helpers
that run outside a context (emitters created by library code, the top-level
``main``) fall back to the state last seen through a context variable.
"""

from __future__ import annotations

from collections.abc import Mapping
from contextvars import ContextVar
from dataclasses import dataclass, field
import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import click
import typer

from prosetex.core.config import ProsetexConfig


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "CLIState",
    "configure_logging",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]

_LEVEL_STYLES = {"warning": "yellow", "error": "red"}


def _bind_console(current: Console | None, stream: TextIO, **options: Any) -> Console:
    # Test runners swap sys.stdout/sys.stderr between invocations.
    from rich.console import Console

    if current is not None and current.file is stream:
        return current
    return Console(file=stream, **options)


@dataclass(slots=True)
class CLIState:
    """Options and collaborators shared by the commands of one invocation."""

    verbosity: int = 0
    show_tracebacks: bool = False
    config: ProsetexConfig = field(default_factory=ProsetexConfig)
    events: dict[str, list[dict[str, Any]]] = field(default_factory=dict, init=False)
    _stdout: Console | None = field(default=None, init=False, repr=False)
    _stderr: Console | None = field(default=None, init=False, repr=False)

    @property
    def console(self) -> Console:
        """Console bound to standard output, for command results."""
        self._stdout = _bind_console(self._stdout, sys.stdout)
        return self._stdout

    @property
    def err_console(self) -> Console:
        """Console bound to standard error, for diagnostics and summaries."""
        self._stderr = _bind_console(self._stderr, sys.stderr, highlight=False)
        return self._stderr

    def record_event(self, name: str, payload: Mapping[str, Any] | None = None) -> None:
        self.events.setdefault(name, []).append(dict(payload or {}))

    def consume_events(self, name: str) -> list[dict[str, Any]]:
        """Return the events recorded under ``name`` and forget them."""
        return self.events.pop(name, [])


_ACTIVE_STATE: ContextVar[CLIState | None] = ContextVar("prosetex_cli_state", default=None)


def _state_from_context(ctx: click.Context | None) -> CLIState | None:
    while ctx is not None:
        if isinstance(ctx.obj, CLIState):
            return ctx.obj
        ctx = ctx.parent
    return None


def get_cli_state(
    ctx: typer.Context | click.Context | None = None,
    *,
    create: bool = True,
) -> CLIState:
    """Return the state of the running invocation.

    Without a click context the last active state is reused. ``create=False``
    raises :class:`RuntimeError` instead of building a fresh state.
    """
    if ctx is None:
        ctx = click.get_current_context(silent=True)

    state = _state_from_context(ctx)
    if state is None and ctx is not None and create:
        state = ctx.obj = CLIState()
    if state is None:
        state = _ACTIVE_STATE.get()
    if state is None:
        if not create:
            raise RuntimeError("CLI state is not initialised for this context.")
        state = CLIState()

    _ACTIVE_STATE.set(state)
    return state


def set_cli_state(
    *,
    ctx: typer.Context | None = None,
    verbosity: int | None = None,
    debug: bool | None = None,
    config: ProsetexConfig | None = None,
) -> CLIState:
    """Apply global options to the active state and return it."""
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    if config is not None:
        state.config = config
    return state


def configure_logging(state: CLIState) -> None:
    """Send ``prosetex`` log records to stderr through a single RichHandler."""
    from rich.logging import RichHandler

    levels = (logging.WARNING, logging.INFO, logging.DEBUG)
    package_logger = logging.getLogger("prosetex")
    for handler in [h for h in package_logger.handlers if isinstance(h, RichHandler)]:
        package_logger.removeHandler(handler)

    package_logger.addHandler(
        RichHandler(
            console=state.err_console,
            show_path=state.verbosity >= 2,
            rich_tracebacks=state.show_tracebacks,
        )
    )
    package_logger.setLevel(levels[min(state.verbosity, len(levels) - 1)])


def _causes(exc: BaseException) -> list[str]:
    seen: set[int] = set()
    causes: list[str] = []
    current = exc.__cause__ or exc.__context__
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        causes.append(f"{type(current).__name__}: {current}")
        current = current.__cause__ or current.__context__
    return causes


def _exception_details(message: str, exc: BaseException, verbosity: int) -> list[str]:
    """Lines appended below a message: nothing at -v0, type at -v, causes at -vv."""
    if verbosity < 1:
        return []
    details: list[str] = []
    text = str(exc).strip()
    if text and text not in message:
        details.append(text)
    details.append(f"type: {type(exc).__name__}")
    causes = _causes(exc) if verbosity >= 2 else []
    if causes:
        details.append("caused by:")
        details.extend(f"  {cause}" for cause in causes)
    return details


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Write a diagnostic to stderr; ``info`` messages are timestamped."""
    state = get_cli_state()
    if level == "info":
        state.err_console.log(message)
        return

    from rich.text import Text

    style = _LEVEL_STYLES.get(level, "red")
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None:
        details = _exception_details(message, exception, state.verbosity)
        if details:
            text.append("\n" + "\n".join(details), style=style)
    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Return whether ``--debug`` was given to the active invocation."""
    try:
        return get_cli_state(create=False).show_tracebacks
    except RuntimeError:
        return False
