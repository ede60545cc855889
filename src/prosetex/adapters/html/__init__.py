"""Standalone HTML preview pages."""

from __future__ import annotations

from .page import KATEX_DELIMITERS, PreviewPageBuilder


__all__ = ["KATEX_DELIMITERS", "PreviewPageBuilder"]
