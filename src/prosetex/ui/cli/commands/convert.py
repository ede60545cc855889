"""Implementation of the `prosetex convert` command."""

from __future__ import annotations

import typer

from prosetex.adapters.files import save_latex
from prosetex.api import ConversionRequest, ConversionService

from .._options import InputArgument, OutputPathOption
from ..diagnostics import CliEmitter
from ..presenter import present_conversion_summary
from ..state import emit_warning, get_cli_state
from ..utils import read_input, report_outcome


def convert(
    ctx: typer.Context,
    source: InputArgument,
    output: OutputPathOption = None,
) -> None:
    """Convert annotated plain text into a LaTeX document."""
    state = get_cli_state(ctx)
    text, path = read_input(source)

    emitter = CliEmitter(state=state)
    if path is not None:
        emitter.event("file_opened", {"path": str(path), "characters": len(text)})
    service = ConversionService(state.config, emitter=emitter)
    response = service.execute(ConversionRequest(text=text, preview=False, source=path))

    if output is None:
        if response.is_empty:
            emit_warning("Input is blank; nothing to convert.")
            return
        typer.echo(response.latex)
        return

    outcome = save_latex(response.latex, output)
    report_outcome(outcome)
    if outcome.path is None:  # pragma: no cover
        raise RuntimeError("Saved outcome is missing its path.")
    emitter.event("file_saved", {"path": str(outcome.path)})
    present_conversion_summary(state, response=response, output_path=outcome.path)
