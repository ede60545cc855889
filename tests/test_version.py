from typer.testing import CliRunner

import prosetex
from prosetex.ui.cli import app


def test_get_version_matches_public_api() -> None:
    assert prosetex.get_version() == prosetex.__version__
    assert isinstance(prosetex.__version__, str)


def test_cli_version_flag() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0, result.stdout
    assert result.stdout.strip() == prosetex.get_version()
