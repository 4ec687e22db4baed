"""Composition, encoding and quality-search algorithms."""

from .compose import compose, flatten, has_transparency
from .encode import encode_image, get_pil_format
from .quality_search import EncodedCandidate, aggressive_search, quality_ladder, select_best

__all__ = [
    "compose",
    "flatten",
    "has_transparency",
    "encode_image",
    "get_pil_format",
    "EncodedCandidate",
    "aggressive_search",
    "quality_ladder",
    "select_best",
]
