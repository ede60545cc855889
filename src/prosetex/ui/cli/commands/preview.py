"""Implementation of the `prosetex preview` command."""

from __future__ import annotations

import typer

from prosetex.api import ConversionRequest, ConversionService
from prosetex.core.config import ViewMode

from .._options import (
    FragmentOption,
    InputArgument,
    LatexInputOption,
    OutputPathOption,
    TitleOption,
    ViewOption,
)
from ..diagnostics import CliEmitter
from ..state import get_cli_state
from ..utils import looks_like_latex, read_input, report_outcome, write_text_output


def preview(
    ctx: typer.Context,
    source: InputArgument,
    output: OutputPathOption = None,
    latex: LatexInputOption = False,
    fragment: FragmentOption = False,
    view: ViewOption = None,
    title: TitleOption = None,
) -> None:
    """Render annotated text (or a LaTeX document) as an HTML preview."""
    if fragment and view is ViewMode.CODE:
        raise typer.BadParameter(
            "--fragment always renders the preview; drop --view code or --fragment.",
            param_hint="--view",
        )
    state = get_cli_state(ctx)
    text, path = read_input(source)
    emitter = CliEmitter(state=state)
    if path is not None:
        emitter.event("file_opened", {"path": str(path), "characters": len(text)})
    service = ConversionService(state.config, emitter=emitter)

    if latex or looks_like_latex(path):
        document = text
    else:
        document = service.execute(
            ConversionRequest(text=text, preview=False, source=path)
        ).latex

    if fragment:
        html = service.render_preview(document)
    else:
        page_title = title or (path.stem if path is not None else "Preview")
        html = service.render_page(document, view_mode=view, title=page_title)

    if output is None:
        typer.echo(html)
        return

    outcome = write_text_output(output, html)
    report_outcome(outcome)
    state.err_console.print(f"Preview written to {outcome.path}", markup=False)
