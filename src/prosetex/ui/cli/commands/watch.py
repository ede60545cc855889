"""Implementation of the `prosetex watch` command."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from prosetex.adapters.files import open_text, save_latex
from prosetex.api import ConversionRequest, ConversionService

from .._options import DebounceOption, MaxRunsOption, OutputPathOption
from ..diagnostics import CliEmitter
from ..state import emit_error, get_cli_state
from ..watch import watch_file


def watch(
    ctx: typer.Context,
    source: Annotated[
        Path,
        typer.Argument(
            metavar="INPUT",
            help="Annotated plain-text file to watch.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    output: OutputPathOption = None,
    debounce: DebounceOption = None,
    max_runs: MaxRunsOption = None,
) -> None:
    """Reconvert INPUT whenever it changes and then settles."""
    state = get_cli_state(ctx)
    editor = state.config.editor
    emitter = CliEmitter(state=state)
    service = ConversionService(state.config, emitter=emitter)
    delay_ms = editor.debounce_ms if debounce is None else debounce

    def _reconvert(path: Path) -> None:
        opened = open_text(path)
        if not opened.success:
            emit_error(opened.error or f"Unable to open '{path}'.")
            return
        emitter.event("watch_change", {"path": str(path)})
        response = service.execute(
            ConversionRequest(text=opened.content or "", preview=False, source=path)
        )
        if output is None:
            typer.echo(response.latex)
            return
        saved = save_latex(response.latex, output)
        if not saved.success:
            emit_error(saved.error or f"Unable to write '{output}'.")
            return
        emitter.event("file_saved", {"path": str(saved.path)})

    try:
        watch_file(
            source,
            _reconvert,
            debounce=delay_ms / 1000,
            poll_interval=editor.poll_interval_ms / 1000,
            max_runs=max_runs,
        )
    except KeyboardInterrupt:
        raise typer.Exit(code=0) from None
