"""reframe_tools - Reframe raster images to a target aspect ratio and size budget."""

from .common.config import ReframeConfig
from .common.errors import (
    CropStateError,
    DecodeError,
    EncodeError,
    InvalidGeometry,
    ReframeError,
)
from .common.raster import RasterImage
from .common.schemas import AspectRatio, OutputFormat, Rect, ScalePolicy, Size
from .plugins.crop_selection import CropSelectionState, CropSelector
from .plugins.geometry import CropSpec, Geometry, needs_cropping, resolve_geometry
from .plugins.transcode import ConversionRequest, ConversionResult, convert, convert_async
from .utils.image_source import SourceImage, SourceInfo, load_source

__version__ = "0.1.0"

__all__ = [
    "AspectRatio",
    "ConversionRequest",
    "ConversionResult",
    "CropSelectionState",
    "CropSelector",
    "CropSpec",
    "CropStateError",
    "DecodeError",
    "EncodeError",
    "Geometry",
    "InvalidGeometry",
    "OutputFormat",
    "RasterImage",
    "Rect",
    "ReframeConfig",
    "ReframeError",
    "ScalePolicy",
    "Size",
    "SourceImage",
    "SourceInfo",
    "__version__",
    "convert",
    "convert_async",
    "load_source",
    "needs_cropping",
    "resolve_geometry",
]
