"""Conversion service shared by the CLI and programmatic hosts.

The service composes the converter and the previewer, times each run and
reports it through a :class:`~prosetex.core.diagnostics.DiagnosticEmitter`.
It owns no state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import time

from prosetex.adapters.html import PreviewPageBuilder
from prosetex.core.config import ProsetexConfig, ViewMode
from prosetex.core.converter import LatexConverter
from prosetex.core.diagnostics import DiagnosticEmitter, ensure_emitter
from prosetex.core.preview import PreviewRenderer


@dataclass(slots=True)
class ConversionRequest:
    """Input of a single conversion run."""

    text: str
    preview: bool = True
    source: Path | None = None


@dataclass(slots=True)
class ConversionResponse:
    """Outcome of a conversion run."""

    latex: str
    html: str | None
    duration: float
    line_count: int
    source: Path | None = None

    @property
    def is_empty(self) -> bool:
        return not self.latex


class ConversionService:
    """Run text → LaTeX → HTML conversions with diagnostics."""

    def __init__(
        self,
        config: ProsetexConfig | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.config = config or ProsetexConfig()
        self.emitter = ensure_emitter(emitter)
        self.converter = LatexConverter(self.config.document)
        self.renderer = PreviewRenderer(self.config.preview)
        self.pages = PreviewPageBuilder(self.config.preview)

    def execute(self, request: ConversionRequest) -> ConversionResponse:
        """Convert the request text and optionally render its preview."""
        started = time.perf_counter()
        latex = self.converter.convert(request.text)
        html: str | None = None
        if request.preview:
            html = self.renderer.render(latex) if latex else ""
        duration = time.perf_counter() - started

        line_count = len(request.text.split("\n")) if request.text.strip() else 0
        if latex:
            payload: dict[str, object] = {"lines": line_count, "duration": duration}
            if request.source is not None:
                payload["source"] = str(request.source)
            self.emitter.event("conversion", payload)

        return ConversionResponse(
            latex=latex,
            html=html,
            duration=duration,
            line_count=line_count,
            source=request.source,
        )

    def render_preview(self, latex: str) -> str:
        """Render an existing LaTeX document into a preview fragment."""
        return self.renderer.render(latex)

    def render_page(
        self,
        latex: str,
        *,
        view_mode: ViewMode | None = None,
        title: str = "Preview",
    ) -> str:
        """Return a standalone HTML page showing ``latex`` in the chosen view."""
        mode = ViewMode(view_mode or self.config.editor.view_mode)
        fragment = self.renderer.render(latex) if mode is ViewMode.RENDERED else ""
        return self.pages.build(fragment=fragment, latex=latex, view_mode=mode, title=title)


__all__ = ["ConversionRequest", "ConversionResponse", "ConversionService"]
