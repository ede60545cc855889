"""Wrap preview fragments into standalone HTML pages.

The math-typesetting pass stays external: rendered pages load KaTeX and its
auto-render extension, which decorate the ``$...$`` and ``$$...$$`` regions
left in the fragment.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from prosetex.core.config import PreviewConfig, ViewMode


TEMPLATE_DIR = Path(__file__).resolve().parent / "partials"

KATEX_DELIMITERS: tuple[dict[str, object], ...] = (
    {"left": "$$", "right": "$$", "display": True},
    {"left": "$", "right": "$", "display": False},
    {"left": "\\[", "right": "\\]", "display": True},
    {"left": "\\(", "right": "\\)", "display": False},
)


class PreviewPageBuilder:
    """Render preview pages from the ``preview.html`` Jinja2 template."""

    def __init__(
        self, config: PreviewConfig | None = None, template_dir: Path = TEMPLATE_DIR
    ) -> None:
        self.config = config or PreviewConfig()
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html"]),
            keep_trailing_newline=True,
        )

    def build(
        self,
        *,
        fragment: str,
        latex: str,
        view_mode: ViewMode = ViewMode.RENDERED,
        title: str = "Preview",
    ) -> str:
        """Return a full HTML document for ``fragment`` or ``latex``."""
        template = self.env.get_template("preview.html")
        return template.render(
            title=title,
            view_mode=ViewMode(view_mode).value,
            fragment=fragment,
            latex=latex,
            katex_version=self.config.katex_version,
            delimiters=KATEX_DELIMITERS,
            classes={
                "theorem": self.config.theorem_class,
                "proof": self.config.proof_class,
                "equation": self.config.equation_class,
            },
        )


__all__ = ["KATEX_DELIMITERS", "TEMPLATE_DIR", "PreviewPageBuilder"]
