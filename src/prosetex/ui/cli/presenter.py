"""Rich-aware presenters for CLI output and diagnostics."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from prosetex.api import ConversionResponse

from .state import CLIState


GUIDE_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "Structure",
        (
            ("# Heading", "\\section{}"),
            ("## Subheading", "\\subsection{}"),
            ("### Sub-subheading", "\\subsubsection{}"),
        ),
    ),
    (
        "Math",
        (
            ("x squared", "x²"),
            ("x cubed", "x³"),
            ("x to the power of n", "xⁿ"),
            ("a over b", "a/b (fraction)"),
            ("square root of x", "√x"),
            ("integral from 0 to 5 of x", "∫₀⁵ x dx"),
            ("sum from i=1 to n", "Σᵢ₌₁ⁿ"),
            ("derivative of f with respect to x", "df/dx"),
            ("limit as x approaches 0", "lim_{x→0}"),
        ),
    ),
    (
        "Symbols",
        (
            ("alpha, beta, gamma, delta, pi, ...", "Greek letters"),
            ("infinity, not equal to, approximately", "∞, ≠, ≈"),
            ("for all, there exists", "∀, ∃"),
            ("real numbers, integers, rationals", "ℝ, ℤ, ℚ"),
        ),
    ),
    (
        "Environments",
        (
            ("Theorem: ...", "theorem environment"),
            ("Proof: ...", "proof environment"),
            ("Equation: ...", "numbered equation"),
            ("End proof / QED", "ends proof"),
        ),
    ),
)


def present_guide(state: CLIState) -> None:
    """Print the annotated-text syntax guide."""
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Write", style="cyan")
    table.add_column("Get")
    for index, (section, entries) in enumerate(GUIDE_SECTIONS):
        if index:
            table.add_section()
        table.add_row(Text(section.upper(), style="bold magenta"), "")
        for source, result in entries:
            table.add_row(source, result)
    state.console.print(Panel(table, title="Syntax guide", expand=False))


def present_rules(state: CLIState, entries: Sequence[Mapping[str, object]]) -> None:
    """Print the ordered math rules as a table."""
    table = Table(box=box.MINIMAL_DOUBLE_HEAD, show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Phase", style="magenta")
    table.add_column("Rule", style="cyan")
    table.add_column("Pattern", overflow="fold")
    for position, entry in enumerate(entries, start=1):
        table.add_row(
            str(position),
            str(entry["phase"]).lower(),
            str(entry["name"]),
            Text(str(entry["pattern"])),
        )
    state.console.print(table)


def present_conversion_summary(
    state: CLIState,
    *,
    response: ConversionResponse,
    output_path: Path,
    kind: str = "LaTeX",
) -> None:
    """Summarise a conversion written to disk."""
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    if response.source is not None:
        table.add_row("Source", str(response.source))
    table.add_row("Output", str(output_path))
    table.add_row("Lines", f"{response.line_count:,}")
    table.add_row("Characters", f"{len(response.latex):,}")
    table.add_row("Duration", f"{response.duration:.3f}s")
    state.err_console.print(Panel(table, title=f"{kind} written", expand=False))


__all__ = [
    "GUIDE_SECTIONS",
    "present_conversion_summary",
    "present_guide",
    "present_rules",
]
