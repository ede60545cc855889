"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from prosetex.core.config import ViewMode


INPUTS_PANEL = "Input Handling"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

InputArgument = Annotated[
    str,
    typer.Argument(
        metavar="INPUT",
        help="Annotated plain-text source file, or '-' to read standard input.",
    ),
]

OutputPathOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the result to this file (or directory) instead of standard output.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

LatexInputOption = Annotated[
    bool,
    typer.Option(
        "--latex",
        help="Treat INPUT as an existing LaTeX document instead of annotated text.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

FragmentOption = Annotated[
    bool,
    typer.Option(
        "--fragment",
        help="Emit only the rendered HTML fragment, without the standalone KaTeX page.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

ViewOption = Annotated[
    ViewMode | None,
    typer.Option(
        "--view",
        help="Show the rendered preview or the raw LaTeX code (defaults to the config).",
        case_sensitive=False,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

TitleOption = Annotated[
    str | None,
    typer.Option(
        "--title",
        help="Title of the standalone preview page (defaults to the input name).",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

PhaseOption = Annotated[
    str | None,
    typer.Option(
        "--phase",
        help="Only list rules of this phase (e.g. greek, powers, cleanup).",
    ),
]

DebounceOption = Annotated[
    int | None,
    typer.Option(
        "--debounce",
        min=0,
        help="Quiet period in milliseconds before reconverting (defaults to the config).",
    ),
]

MaxRunsOption = Annotated[
    int | None,
    typer.Option(
        "--max-runs",
        min=1,
        help="Stop after this many conversions.",
        hidden=True,
    ),
]
