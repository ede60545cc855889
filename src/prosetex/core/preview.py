"""LaTeX to HTML preview rendering.

The renderer walks the lines of a LaTeX document produced by
:mod:`prosetex.core.converter` and maps each recognised construct to an HTML
tag. Math delimiters are left untouched for a downstream typesetting pass and
no HTML escaping is performed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import re

from .config import PreviewConfig


logger = logging.getLogger(__name__)

BEGIN_DOCUMENT = "\\begin{document}"
END_DOCUMENT = "\\end{document}"

_HEADINGS: tuple[tuple[str, re.Pattern[str], str], ...] = (
    ("\\section{", re.compile(r"\\section\{(.*?)\}"), "h1"),
    ("\\subsection{", re.compile(r"\\subsection\{(.*?)\}"), "h2"),
    ("\\subsubsection{", re.compile(r"\\subsubsection\{(.*?)\}"), "h3"),
)

BLOCKS = ("theorem", "proof", "equation")


@dataclass(slots=True)
class _BlockState:
    """Open/closed flags per block; documentary only, never validated."""

    open: dict[str, bool] = field(default_factory=lambda: dict.fromkeys(BLOCKS, False))

    def unclosed(self) -> list[str]:
        return [name for name, is_open in self.open.items() if is_open]


class PreviewRenderer:
    """Render a LaTeX document into a simplified HTML fragment."""

    def __init__(self, config: PreviewConfig | None = None) -> None:
        self.config = config or PreviewConfig()

    def css_class(self, block: str) -> str:
        return getattr(self.config, f"{block}_class")

    def render(self, latex: str) -> str:
        """Return the HTML fragment for the body of ``latex``."""
        html: list[str] = []
        state = _BlockState()
        in_document = False

        for raw_line in latex.split("\n"):
            line = raw_line.strip()

            if BEGIN_DOCUMENT in line:
                in_document = True
                continue
            if END_DOCUMENT in line:
                break
            if not in_document:
                continue

            html.append(self.render_line(line, state))

        unclosed = state.unclosed()
        if unclosed:
            logger.debug("preview ended with open blocks: %s", ", ".join(unclosed))
        return "".join(html)

    def render_line(self, line: str, state: _BlockState) -> str:
        if not line:
            return "<br>"

        for prefix, pattern, tag in _HEADINGS:
            if line.startswith(prefix):
                match = pattern.search(line)
                content = match.group(1) if match else ""
                return f"<{tag}>{content}</{tag}>"

        for block in BLOCKS:
            if f"\\begin{{{block}}}" in line:
                state.open[block] = True
                return f'<div class="{self.css_class(block)}">'
            if f"\\end{{{block}}}" in line:
                state.open[block] = False
                return "</div>"

        return f"<p>{line}</p>"


_DEFAULT_RENDERER = PreviewRenderer()


def render(latex: str) -> str:
    """Render ``latex`` with the default block classes."""
    return _DEFAULT_RENDERER.render(latex)


__all__ = ["BEGIN_DOCUMENT", "BLOCKS", "END_DOCUMENT", "PreviewRenderer", "render"]
