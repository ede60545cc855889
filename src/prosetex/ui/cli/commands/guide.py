"""Implementation of the `prosetex guide` command."""

from __future__ import annotations

import typer

from ..presenter import present_guide
from ..state import get_cli_state


def guide(ctx: typer.Context) -> None:
    """Show the annotated-text syntax guide."""
    present_guide(get_cli_state(ctx))
