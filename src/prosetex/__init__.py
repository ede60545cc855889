"""Primary public API for prosetex."""

from __future__ import annotations

from prosetex.adapters.files import FileOutcome, open_text, save_latex
from prosetex.api import ConversionRequest, ConversionResponse, ConversionService
from prosetex.core.config import (
    DocumentConfig,
    EditorConfig,
    PreviewConfig,
    ProsetexConfig,
    ViewMode,
    load_config,
)
from prosetex.core.converter import LatexConverter, convert
from prosetex.core.exceptions import ConfigError, DocumentIOError, ProsetexError
from prosetex.core.math_phrases import MathPhraseConverter, convert_math
from prosetex.core.preview import PreviewRenderer, render
from prosetex.core.rules import MathRule, RulePhase, RuleRegistry
from prosetex.version import get_version


__version__ = get_version()

__all__ = [
    "ConfigError",
    "ConversionRequest",
    "ConversionResponse",
    "ConversionService",
    "DocumentConfig",
    "DocumentIOError",
    "EditorConfig",
    "FileOutcome",
    "LatexConverter",
    "MathPhraseConverter",
    "MathRule",
    "PreviewConfig",
    "PreviewRenderer",
    "ProsetexConfig",
    "ProsetexError",
    "RulePhase",
    "RuleRegistry",
    "ViewMode",
    "__version__",
    "convert",
    "convert_math",
    "get_version",
    "load_config",
    "open_text",
    "render",
    "save_latex",
]
