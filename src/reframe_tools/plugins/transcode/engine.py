"""Transcoding engine: compose, detect transparency, pick a format, encode."""

import asyncio
from collections.abc import Callable

from loguru import logger

from ...common.config import DEFAULT_CONFIG, ReframeConfig
from ...common.schemas import OutputFormat, ScalePolicy, round_half_up
from ...utils.profiling import timed
from ..geometry.algo.geometry_resolver import resolve_geometry
from ..geometry.schema import Geometry
from .algo.compose import TRANSPARENT, compose, flatten, has_transparency
from .algo.encode import encode_image
from .algo.quality_search import EncodedCandidate, aggressive_search, quality_ladder
from .schema import ConversionRequest, ConversionResult

ProgressCallback = Callable[[int], None]

# Progress checkpoints (percent)
_COMPOSED = 30
_SCANNED = 40
_SEARCH_SPAN = 50


def resolve_format(requested: OutputFormat, transparent: bool) -> OutputFormat:
    """Transparent output can never be JPEG; it is forced to PNG."""
    if transparent and not requested.supports_alpha:
        return OutputFormat.PNG
    return requested


def compression_ratio_percent(result_size: int, original_size: int) -> int:
    return round_half_up((1 - result_size / original_size) * 100)


@timed
def convert(
    request: ConversionRequest,
    geometry: Geometry | None = None,
    *,
    config: ReframeConfig | None = None,
    progress_callback: ProgressCallback | None = None,
) -> ConversionResult:
    """
    Render, encode and (for lossy formats) compress one source image.

    Composition and the transparency scan always finish before the first
    encode starts. The search's candidate encodes may run concurrently
    (``config.max_workers``) and are joined before a winner is chosen.

    Args:
        request: Source, crop, quality pin and output format
        geometry: Pre-resolved placement; resolved from ``request`` when omitted
        config: Engine configuration
        progress_callback: Receives progress percentages up to 100

    Returns:
        ConversionResult with encoded bytes and metadata

    Raises:
        InvalidGeometry: If the crop or source dimensions are degenerate
        EncodeError: If the chosen encoder is unavailable or fails
    """
    config = config or DEFAULT_CONFIG
    source = request.source

    def report(progress: int) -> None:
        if progress_callback:
            progress_callback(progress)

    if geometry is None:
        geometry = resolve_geometry(
            source.width,
            source.height,
            request.crop,
            request.target_size,
            config=config,
        )

    letterbox = request.crop is None and config.scale_policy is ScalePolicy.FIT
    surface = compose(
        source,
        geometry,
        resample=config.resample_filter,
        fill=config.letterbox_fill if letterbox else TRANSPARENT,
    )
    report(_COMPOSED)

    transparent = has_transparency(surface)
    report(_SCANNED)

    fmt = resolve_format(request.output_format, transparent)
    if fmt is not request.output_format:
        logger.info(
            f"Output has transparency; using {fmt.value} "
            + f"instead of {request.output_format.value}"
        )

    if fmt is OutputFormat.PNG or (fmt is OutputFormat.WEBP and request.lossless):
        image = surface if transparent or fmt is OutputFormat.WEBP else surface.convert("RGB")
        data = encode_image(image, fmt, lossless=True, optimize=config.png_optimize)
        quality = 100

    else:
        image = flatten(surface) if fmt is OutputFormat.JPEG else surface

        if request.target_quality is not None:
            data = encode_image(image, fmt, request.target_quality)
            quality = request.target_quality

        else:
            ladder_size = len(quality_ladder(source.size_kb, config))
            ladder_done = 0

            def on_candidate(_: EncodedCandidate) -> None:
                nonlocal ladder_done
                ladder_done += 1
                report(_SCANNED + ladder_done * _SEARCH_SPAN // ladder_size)

            best = aggressive_search(
                image,
                fmt,
                source.byte_length,
                config=config,
                encode=lambda img, f, q: encode_image(img, f, q),
                on_candidate=on_candidate,
            )
            data = best.data
            quality = best.quality

    result = ConversionResult(
        data=data,
        width=geometry.target_width,
        height=geometry.target_height,
        format=fmt,
        quality=quality,
        has_transparency=transparent,
        original_size_bytes=source.byte_length,
        compression_ratio_percent=compression_ratio_percent(len(data), source.byte_length),
        aspect_ratio=geometry.aspect_ratio,
    )
    report(100)

    logger.info(
        f"Converted {source.width}x{source.height} -> {result.width}x{result.height} "
        + f"{result.format.value} q={result.quality}: {result.original_size_kb} KB -> "
        + f"{result.size_kb} KB ({result.compression_ratio_percent}%)"
    )
    return result


async def convert_async(
    request: ConversionRequest,
    geometry: Geometry | None = None,
    *,
    config: ReframeConfig | None = None,
    progress_callback: ProgressCallback | None = None,
) -> ConversionResult:
    """Run :func:`convert` off the event loop thread.

    The call cannot be cancelled mid-encode; a cancelled awaiter simply
    never sees the result.
    """
    return await asyncio.to_thread(
        convert,
        request,
        geometry,
        config=config,
        progress_callback=progress_callback,
    )
