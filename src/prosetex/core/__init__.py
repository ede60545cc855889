"""Core text transforms and their supporting models."""

from __future__ import annotations

from .config import (
    DocumentConfig,
    EditorConfig,
    PreviewConfig,
    ProsetexConfig,
    ViewMode,
    load_config,
)
from .converter import LatexConverter, convert
from .exceptions import ConfigError, DocumentIOError, ProsetexError
from .math_phrases import MathPhraseConverter, convert_math
from .preview import PreviewRenderer, render
from .rules import MathRule, RuleEngine, RulePhase, RuleRegistry, collect_rules, rewrites


__all__ = [
    "ConfigError",
    "DocumentConfig",
    "DocumentIOError",
    "EditorConfig",
    "LatexConverter",
    "MathPhraseConverter",
    "MathRule",
    "PreviewConfig",
    "PreviewRenderer",
    "ProsetexConfig",
    "ProsetexError",
    "RuleEngine",
    "RulePhase",
    "RuleRegistry",
    "ViewMode",
    "convert",
    "convert_math",
    "load_config",
    "collect_rules",
    "render",
    "rewrites",
]
