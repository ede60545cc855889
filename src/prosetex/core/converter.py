"""Plain-text to LaTeX conversion.

The converter is line-local: every input line is classified on its own and
mapped to one structural action. No state survives between lines, so a
``Theorem:`` line without a matching ``end theorem`` leaves the environment
open in the output. That is accepted best-effort output, not an error.
"""

from __future__ import annotations

from collections.abc import Callable
import logging

from .config import DocumentConfig
from .math_phrases import MathPhraseConverter


logger = logging.getLogger(__name__)

HEADINGS: tuple[tuple[str, str], ...] = (
    ("# ", "section"),
    ("## ", "subsection"),
    ("### ", "subsubsection"),
)

_CLOSERS: dict[str, str] = {
    "end proof": "proof",
    "qed": "proof",
    "end theorem": "theorem",
}


class LatexConverter:
    """Convert annotated plain text into a complete LaTeX document."""

    def __init__(
        self,
        document: DocumentConfig | None = None,
        math: Callable[[str], str] | None = None,
    ) -> None:
        self.document = document or DocumentConfig()
        self.convert_math = math or MathPhraseConverter()

    def convert(self, text: str) -> str:
        """Return the LaTeX document for ``text``, or ``""`` for blank input."""
        if not text.strip():
            return ""

        lines = text.split("\n")
        body: list[str] = []
        for raw_line in lines:
            body.extend(self.convert_line(raw_line.strip()))
        logger.debug("converted %d source lines into %d body lines", len(lines), len(body))
        return self.build_document("\n".join(body))

    def convert_line(self, line: str) -> list[str]:
        """Map a single stripped line to the LaTeX lines it emits."""
        if not line:
            return [""]

        for prefix, command in HEADINGS:
            if line.startswith(prefix):
                return [f"\\{command}{{{line[len(prefix):]}}}"]

        lowered = line.lower()
        for environment in ("theorem", "proof"):
            marker = f"{environment}:"
            if lowered.startswith(marker):
                remainder = line[len(marker) :].strip()
                return [f"\\begin{{{environment}}}", self.convert_math(remainder)]

        closed = _CLOSERS.get(lowered)
        if closed is not None:
            return [f"\\end{{{closed}}}"]

        if lowered.startswith("equation:"):
            remainder = line[len("equation:") :].strip()
            return ["\\begin{equation}", self.convert_math(remainder), "\\end{equation}"]

        return [self.convert_math(line)]

    def build_document(self, body: str) -> str:
        """Wrap ``body`` with the configured preamble and document markers."""
        parts = [
            *self.document.preamble(),
            "",
            "\\begin{document}",
            "",
            body,
            "",
            "\\end{document}",
        ]
        return "\n".join(parts)


_DEFAULT_CONVERTER = LatexConverter()


def convert(text: str) -> str:
    """Convert annotated plain text with the default preamble."""
    return _DEFAULT_CONVERTER.convert(text)


__all__ = ["HEADINGS", "LatexConverter", "convert"]
