"""Auxiliary helpers used by CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer

from prosetex.adapters.files import FileOutcome, open_text
from prosetex.core.exceptions import DocumentIOError, exception_hint


STDIN_MARKER = "-"

LATEX_SUFFIXES = {".tex", ".latex", ".ltx"}


def read_input(source: str) -> tuple[str, Path | None]:
    """Return the text of ``source`` and its path (``None`` for stdin).

    Raises :class:`typer.Exit` after reporting a failure outcome.
    """
    from .state import emit_error

    if source == STDIN_MARKER:
        return typer.get_text_stream("stdin").read(), None

    outcome = open_text(Path(source))
    if not outcome.success:
        emit_error(outcome.error or f"Unable to open '{source}'.")
        raise typer.Exit(code=1)
    return outcome.content or "", outcome.path


def report_outcome(outcome: FileOutcome) -> None:
    """Turn a failed or cancelled outcome into a CLI exit."""
    from .state import emit_error, emit_warning

    if outcome.canceled:
        emit_warning("Save cancelled.")
        raise typer.Exit(code=0)
    try:
        outcome.raise_for_failure()
    except DocumentIOError as exc:
        emit_error(exception_hint(exc) or "Unknown file error.", exception=exc)
        raise typer.Exit(code=1) from exc


def looks_like_latex(path: Path | None) -> bool:
    return path is not None and path.suffix.lower() in LATEX_SUFFIXES


def write_text_output(target: Path, content: str) -> FileOutcome:
    """Persist non-LaTeX output such as HTML previews."""
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        return FileOutcome.failed(f"Failed to write '{target}': {exc}", target)
    return FileOutcome.ok(target)
