"""CLI command implementations exposed via `prosetex.ui.cli`.

Re-exports the Typer command callables defined in the sibling modules so they
can be imported using dotted paths (e.g. ``prosetex.ui.cli.commands.convert``).
"""

from __future__ import annotations

from .convert import convert
from .guide import guide
from .preview import preview
from .rules import rules
from .watch import watch


__all__ = ["convert", "guide", "preview", "rules", "watch"]
