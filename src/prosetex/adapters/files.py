"""File persistence collaborator.

Mirrors the save/open contract of an editor host: every call returns a
:class:`FileOutcome` that is either a success, a user cancellation (no path
chosen) or a failure carrying a message. Failures are reported once; there is
no retry.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path

from prosetex.core.exceptions import DocumentIOError


logger = logging.getLogger(__name__)

DEFAULT_LATEX_NAME = "notes.tex"
LATEX_SUFFIX = ".tex"


@dataclass(frozen=True, slots=True)
class FileOutcome:
    """Result of a save or open request."""

    success: bool
    canceled: bool = False
    path: Path | None = None
    content: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, path: Path, content: str | None = None) -> FileOutcome:
        return cls(success=True, path=path, content=content)

    @classmethod
    def cancelled(cls) -> FileOutcome:
        return cls(success=False, canceled=True)

    @classmethod
    def failed(cls, message: str, path: Path | None = None) -> FileOutcome:
        return cls(success=False, path=path, error=message)

    def raise_for_failure(self) -> None:
        """Raise :class:`DocumentIOError` when the request failed."""
        if not self.success and not self.canceled:
            raise DocumentIOError(self.error or "Unknown file error.")


def resolve_latex_target(target: Path, default_name: str = DEFAULT_LATEX_NAME) -> Path:
    """Return the file path a save request for ``target`` writes to."""
    if target.exists() and target.is_dir():
        return target / default_name
    if not target.suffix:
        return target.with_suffix(LATEX_SUFFIX)
    return target


def save_latex(
    content: str,
    target: Path | None,
    *,
    default_name: str = DEFAULT_LATEX_NAME,
) -> FileOutcome:
    """Persist ``content`` to ``target``; ``None`` means the user cancelled."""
    if not content:
        return FileOutcome.failed("No LaTeX to save. Please convert some text first.")
    if target is None:
        return FileOutcome.cancelled()

    destination = resolve_latex_target(target, default_name)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(content, encoding="utf-8")
    except OSError as exc:
        logger.debug("failed to write %s", destination, exc_info=exc)
        return FileOutcome.failed(
            f"Failed to write LaTeX output to '{destination}': {exc}", destination
        )
    return FileOutcome.ok(destination)


def open_text(path: Path | None) -> FileOutcome:
    """Read a UTF-8 text file; ``None`` means the user cancelled."""
    if path is None:
        return FileOutcome.cancelled()
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("failed to read %s", path, exc_info=exc)
        return FileOutcome.failed(f"Failed to read '{path}': {exc}", path)
    return FileOutcome.ok(path, content)


__all__ = [
    "DEFAULT_LATEX_NAME",
    "LATEX_SUFFIX",
    "FileOutcome",
    "open_text",
    "resolve_latex_target",
    "save_latex",
]
