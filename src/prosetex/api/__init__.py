"""High-level conversion services for hosts."""

from __future__ import annotations

from .service import ConversionRequest, ConversionResponse, ConversionService


__all__ = ["ConversionRequest", "ConversionResponse", "ConversionService"]
