"""Configuration models used by the converter, previewer and hosts.

DocumentConfig

`document_class` (`str`)
: LaTeX class named in ``\\documentclass``.

`class_options` (`list[str]`)
: Options passed to the document class, joined with commas.

`packages` (`list[str]`)
: Packages imported with ``\\usepackage`` in the listed order.

`geometry` (`str | None`)
: Argument of the trailing ``\\geometry{...}`` line. ``None`` omits it, as
  does a package list without ``geometry``.

PreviewConfig

`theorem_class`, `proof_class`, `equation_class` (`str`)
: CSS classes of the ``<div>`` wrapping each block in the HTML preview.

`katex_version` (`str`)
: KaTeX release loaded by standalone preview pages.

EditorConfig

`view_mode` (`ViewMode`)
: ``rendered`` shows the HTML preview, ``code`` shows the raw LaTeX.

`debounce_ms` (`int`)
: Quiet period after the last change before a watched file is reconverted.

`poll_interval_ms` (`int`)
: How often watched files are checked for modifications.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
import yaml

from .exceptions import ConfigError


class ViewMode(str, Enum):
    """Output presentation selected by the host."""

    RENDERED = "rendered"
    CODE = "code"


class DocumentConfig(BaseModel):
    """Preamble of generated LaTeX documents."""

    model_config = ConfigDict(extra="forbid")

    document_class: str = "article"
    class_options: list[str] = Field(default_factory=lambda: ["12pt"])
    packages: list[str] = Field(
        default_factory=lambda: ["amsmath", "amssymb", "amsthm", "geometry"]
    )
    geometry: str | None = "margin=1in"

    def preamble(self) -> list[str]:
        """Return the preamble lines in emission order."""
        options = f"[{','.join(self.class_options)}]" if self.class_options else ""
        lines = [f"\\documentclass{options}{{{self.document_class}}}"]
        lines.extend(f"\\usepackage{{{package}}}" for package in self.packages)
        if self.geometry and "geometry" in self.packages:
            lines.append(f"\\geometry{{{self.geometry}}}")
        return lines


class PreviewConfig(BaseModel):
    """Styling hooks of the HTML preview."""

    model_config = ConfigDict(extra="forbid")

    theorem_class: str = "theorem"
    proof_class: str = "proof"
    equation_class: str = "equation"
    katex_version: str = "0.16.9"


class EditorConfig(BaseModel):
    """Host-side presentation state kept outside the transforms."""

    model_config = ConfigDict(extra="forbid")

    view_mode: ViewMode = ViewMode.RENDERED
    debounce_ms: int = Field(default=500, ge=0)
    poll_interval_ms: int = Field(default=100, gt=0)


class ProsetexConfig(BaseModel):
    """Top-level configuration file layout."""

    model_config = ConfigDict(extra="forbid")

    document: DocumentConfig = Field(default_factory=DocumentConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)


def load_config(path: Path | str | None = None) -> ProsetexConfig:
    """Load a YAML configuration file, returning defaults when ``path`` is None."""
    if path is None:
        return ProsetexConfig()

    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file '{source}': {exc}") from exc

    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in configuration file '{source}': {exc}") from exc

    if data is None:
        return ProsetexConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file '{source}' must contain a mapping.")

    try:
        return ProsetexConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in '{source}': {exc}") from exc


__all__ = [
    "DocumentConfig",
    "EditorConfig",
    "PreviewConfig",
    "ProsetexConfig",
    "ViewMode",
    "load_config",
]
