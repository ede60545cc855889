from pathlib import Path

import pytest

from prosetex.adapters.files import (
    FileOutcome,
    open_text,
    resolve_latex_target,
    save_latex,
)
from prosetex.core.exceptions import DocumentIOError


def test_save_writes_content(tmp_path: Path) -> None:
    target = tmp_path / "out.tex"
    outcome = save_latex("\\begin{document}", target)
    assert outcome.success
    assert outcome.path == target
    assert target.read_text(encoding="utf-8") == "\\begin{document}"


def test_save_without_content_fails(tmp_path: Path) -> None:
    outcome = save_latex("", tmp_path / "out.tex")
    assert not outcome.success
    assert not outcome.canceled
    assert outcome.error == "No LaTeX to save. Please convert some text first."
    assert not (tmp_path / "out.tex").exists()


def test_save_without_target_is_cancelled() -> None:
    outcome = save_latex("content", None)
    assert outcome.canceled
    assert not outcome.success
    assert outcome.error is None


def test_save_into_directory_uses_default_name(tmp_path: Path) -> None:
    outcome = save_latex("content", tmp_path)
    assert outcome.path == tmp_path / "notes.tex"
    assert (tmp_path / "notes.tex").read_text(encoding="utf-8") == "content"


def test_resolve_adds_tex_suffix(tmp_path: Path) -> None:
    assert resolve_latex_target(tmp_path / "paper") == tmp_path / "paper.tex"
    assert resolve_latex_target(tmp_path / "paper.ltx") == tmp_path / "paper.ltx"


def test_save_failure_is_reported(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    outcome = save_latex("content", blocker / "out.tex")
    assert not outcome.success
    assert not outcome.canceled
    assert outcome.error is not None
    assert "Failed to write LaTeX output" in outcome.error


def test_open_reads_text(tmp_path: Path) -> None:
    source = tmp_path / "notes.txt"
    source.write_text("# Title", encoding="utf-8")
    outcome = open_text(source)
    assert outcome.success
    assert outcome.content == "# Title"


def test_open_missing_file_fails(tmp_path: Path) -> None:
    outcome = open_text(tmp_path / "missing.txt")
    assert not outcome.success
    assert outcome.error is not None
    assert "Failed to read" in outcome.error


def test_open_without_path_is_cancelled() -> None:
    assert open_text(None).canceled


def test_raise_for_failure() -> None:
    FileOutcome.ok(Path("x.tex")).raise_for_failure()
    FileOutcome.cancelled().raise_for_failure()
    with pytest.raises(DocumentIOError, match="disk full"):
        FileOutcome.failed("disk full").raise_for_failure()
