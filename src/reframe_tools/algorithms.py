"""Public algorithm API for reframe_tools.

Every step of a conversion is exported here so callers can run the
pipeline piecemeal (e.g. preview geometry without encoding).

Example:
    One-shot conversion::

        from reframe_tools.algorithms import ConversionRequest, convert, load_source

        with open("photo.png", "rb") as f:
            source = load_source(f.read(), name="photo.png")

        result = convert(ConversionRequest(source=source.raster, output_format="jpg"))
        print(result.format, result.quality, f"{result.compression_ratio_percent}%")

    Interactive crop, then convert without blocking an event loop::

        from reframe_tools.algorithms import (
            AspectRatio, ConversionRequest, CropSelector, convert_async,
        )

        selector = CropSelector(source.info.width, source.info.height, AspectRatio.SQUARE)
        selector.begin_drag()
        selector.drag_to(0.3, 0.5)
        selector.end_drag()
        crop = selector.confirm()

        result = await convert_async(ConversionRequest(source=source.raster, crop=crop))

    Step by step::

        from reframe_tools.algorithms import compose, has_transparency, resolve_geometry

        geometry = resolve_geometry(4000, 2000)
        surface = compose(source.raster, geometry)
        print(has_transparency(surface))
"""

# Shared types
from .common.config import ReframeConfig
from .common.raster import RasterImage
from .common.schemas import AspectRatio, OutputFormat, ScalePolicy, Size

# Crop selection
from .plugins.crop_selection.algo.crop_selector import CropSelector

# Geometry
from .plugins.geometry.algo.geometry_resolver import (
    clamp_crop,
    needs_cropping,
    resolve_geometry,
)
from .plugins.geometry.schema import CropSpec, Geometry

# Composition
from .plugins.transcode.algo.compose import (
    compose,
    flatten,
    has_transparency,
)

# Encoding
from .plugins.transcode.algo.encode import (
    encode_image,
    get_pil_format,
)

# Compression search
from .plugins.transcode.algo.quality_search import (
    aggressive_search,
    quality_ladder,
    select_best,
)
from .plugins.transcode.engine import (
    compression_ratio_percent,
    convert,
    convert_async,
    resolve_format,
)
from .plugins.transcode.schema import ConversionRequest, ConversionResult

# Utilities
from .utils.filenames import output_filename
from .utils.image_source import load_source, load_source_file
from .utils.media_types import sniff_mime

__all__ = [
    # Shared types
    "ReframeConfig",
    "RasterImage",
    "AspectRatio",
    "OutputFormat",
    "ScalePolicy",
    "Size",
    # Crop selection
    "CropSelector",
    # Geometry
    "CropSpec",
    "Geometry",
    "clamp_crop",
    "needs_cropping",
    "resolve_geometry",
    # Composition
    "compose",
    "flatten",
    "has_transparency",
    # Encoding
    "encode_image",
    "get_pil_format",
    # Compression search
    "aggressive_search",
    "quality_ladder",
    "select_best",
    # Engine
    "ConversionRequest",
    "ConversionResult",
    "compression_ratio_percent",
    "convert",
    "convert_async",
    "resolve_format",
    # Utilities
    "output_filename",
    "load_source",
    "load_source_file",
    "sniff_mime",
]
