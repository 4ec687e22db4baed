"""Common module - errors, shared schemas, and configuration."""

from .config import DEFAULT_CONFIG, ReframeConfig
from .errors import CropStateError, DecodeError, EncodeError, InvalidGeometry, ReframeError
from .raster import RasterImage
from .schemas import AspectRatio, OutputFormat, Rect, ScalePolicy, Size, round_half_up

__all__ = [
    "ReframeConfig",
    "DEFAULT_CONFIG",
    "ReframeError",
    "DecodeError",
    "InvalidGeometry",
    "EncodeError",
    "CropStateError",
    "AspectRatio",
    "OutputFormat",
    "Rect",
    "ScalePolicy",
    "Size",
    "RasterImage",
    "round_half_up",
]
