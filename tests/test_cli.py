from pathlib import Path

from bs4 import BeautifulSoup
from typer.testing import CliRunner

from prosetex.ui.cli import app


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_convert_prints_latex(tmp_path: Path) -> None:
    source = _write(tmp_path, "notes.txt", "# Title\nx squared")
    runner = CliRunner()
    result = runner.invoke(app, ["convert", str(source)])

    assert result.exit_code == 0, result.stdout
    assert "\\section{Title}" in result.stdout
    assert "$$x^2$$" in result.stdout
    assert "\\end{document}" in result.stdout


def test_convert_reads_stdin() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["convert", "-"], input="p iff q\n")

    assert result.exit_code == 0, result.stdout
    assert "p $\\iff$ q" in result.stdout


def test_convert_writes_output_file(tmp_path: Path) -> None:
    source = _write(tmp_path, "notes.txt", "Theorem: a over b")
    target = tmp_path / "build" / "paper"
    runner = CliRunner()
    result = runner.invoke(app, ["convert", str(source), "--output", str(target)])

    assert result.exit_code == 0, result.stdout
    written = (tmp_path / "build" / "paper.tex").read_text(encoding="utf-8")
    assert "\\begin{theorem}" in written
    assert "$\\frac{a}{b}$" in written


def test_convert_blank_input_warns(tmp_path: Path) -> None:
    source = _write(tmp_path, "blank.txt", "\n\n")
    target = tmp_path / "out.tex"
    runner = CliRunner()

    result = runner.invoke(app, ["convert", str(source)])
    assert result.exit_code == 0
    assert "\\documentclass" not in result.stdout

    result = runner.invoke(app, ["convert", str(source), "-o", str(target)])
    assert result.exit_code == 1
    assert not target.exists()


def test_convert_missing_input_fails(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["convert", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1


def test_preview_emits_page(tmp_path: Path) -> None:
    source = _write(tmp_path, "notes.txt", "# Title\nalpha")
    runner = CliRunner()
    result = runner.invoke(app, ["preview", str(source)])

    assert result.exit_code == 0, result.stdout
    soup = BeautifulSoup(result.stdout, "html.parser")
    assert soup.title is not None
    assert soup.title.string == "notes"
    main = soup.find("main", id="preview")
    assert main is not None
    assert main.h1 is not None
    assert main.h1.get_text() == "Title"


def test_preview_fragment_from_latex_file(tmp_path: Path) -> None:
    source = _write(
        tmp_path, "paper.tex", "\\begin{document}\n\\subsection{Part}\n\\end{document}"
    )
    runner = CliRunner()
    result = runner.invoke(app, ["preview", str(source), "--fragment"])

    assert result.exit_code == 0, result.stdout
    assert result.stdout.strip() == "<h2>Part</h2>"


def test_preview_code_view_to_file(tmp_path: Path) -> None:
    source = _write(tmp_path, "notes.txt", "a < b")
    target = tmp_path / "preview.html"
    runner = CliRunner()
    result = runner.invoke(
        app, ["preview", str(source), "--view", "code", "--title", "Code", "-o", str(target)]
    )

    assert result.exit_code == 0, result.stdout
    page = target.read_text(encoding="utf-8")
    assert "<title>Code</title>" in page
    assert "a &lt; b" in page
    assert 'id="preview"' not in page


def test_rules_lists_phases() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["rules", "--phase", "cleanup"])

    assert result.exit_code == 0, result.stdout
    assert "collapse_dollars" in result.stdout
    assert "alpha" not in result.stdout


def test_rules_rejects_unknown_phase() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["rules", "--phase", "nonsense"])
    assert result.exit_code == 2


def test_guide_shows_syntax() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["guide"])

    assert result.exit_code == 0, result.stdout
    assert "Syntax guide" in result.stdout
    assert "x squared" in result.stdout


def test_config_option_changes_preamble(tmp_path: Path) -> None:
    config = _write(tmp_path, "prosetex.yml", "document:\n  document_class: report\n")
    source = _write(tmp_path, "notes.txt", "Hello")
    runner = CliRunner()
    result = runner.invoke(app, ["--config", str(config), "convert", str(source)])

    assert result.exit_code == 0, result.stdout
    assert "\\documentclass[12pt]{report}" in result.stdout


def test_invalid_config_exits_with_error(tmp_path: Path) -> None:
    config = _write(tmp_path, "prosetex.yml", "- not\n- a mapping\n")
    source = _write(tmp_path, "notes.txt", "Hello")
    runner = CliRunner()
    result = runner.invoke(app, ["--config", str(config), "convert", str(source)])

    assert result.exit_code == 1
    assert "\\documentclass" not in result.stdout


def test_watch_converts_once_with_max_runs(tmp_path: Path) -> None:
    source = _write(tmp_path, "notes.txt", "x cubed")
    target = tmp_path / "out.tex"
    runner = CliRunner()
    result = runner.invoke(
        app, ["watch", str(source), "-o", str(target), "--max-runs", "1", "--debounce", "0"]
    )

    assert result.exit_code == 0, result.stdout
    assert "$$x^3$$" in target.read_text(encoding="utf-8")


def test_preview_fragment_rejects_code_view(tmp_path: Path) -> None:
    source = _write(tmp_path, "notes.txt", "# Title")
    runner = CliRunner()
    result = runner.invoke(app, ["preview", str(source), "--fragment", "--view", "code"])

    assert result.exit_code == 2
    assert "<h1>" not in result.stdout
