"""Transcoding / compression engine plugin."""

from .engine import convert, convert_async, resolve_format
from .schema import ConversionRequest, ConversionResult

__all__ = [
    "ConversionRequest",
    "ConversionResult",
    "convert",
    "convert_async",
    "resolve_format",
]
