"""Implementation of the `prosetex rules` command."""

from __future__ import annotations

import typer

from prosetex.core.math_phrases import MathPhraseConverter
from prosetex.core.rules import RulePhase

from .._options import PhaseOption
from ..presenter import present_rules
from ..state import get_cli_state


def rules(ctx: typer.Context, phase: PhaseOption = None) -> None:
    """List the verbal-math rules in the order they are applied."""
    state = get_cli_state(ctx)
    entries = MathPhraseConverter().describe()

    if phase is not None:
        wanted = phase.strip().upper().replace("-", "_")
        if wanted not in RulePhase.__members__:
            choices = ", ".join(name.lower() for name in RulePhase.__members__)
            raise typer.BadParameter(f"Unknown phase '{phase}'. Choose from: {choices}.")
        entries = [entry for entry in entries if entry["phase"] == wanted]

    present_rules(state, entries)
