"""Pure geometry computation: source sub-rectangle and destination placement."""

from math import gcd

from loguru import logger

from ....common.config import DEFAULT_CONFIG, ReframeConfig
from ....common.errors import InvalidGeometry
from ....common.schemas import AspectRatio, Rect, ScalePolicy, Size
from ..schema import ASPECT_TOLERANCE, CropSpec, Geometry


def largest_window(source_width: float, source_height: float, ratio: float) -> tuple[float, float]:
    """Largest (width, height) of the given ratio that fits inside the source."""
    if source_width / source_height > ratio:
        return source_height * ratio, source_height
    return source_width, source_width / ratio


def needs_cropping(
    width: int,
    height: int,
    aspect: AspectRatio | float,
    tolerance: float = ASPECT_TOLERANCE,
) -> bool:
    """True when the source ratio differs from ``aspect`` by more than ``tolerance``."""
    if width <= 0 or height <= 0:
        raise InvalidGeometry(f"Source has zero area: {width}x{height}")
    ratio = aspect.ratio if isinstance(aspect, AspectRatio) else aspect
    return abs(width / height - ratio) > tolerance


def clamp_crop(crop: CropSpec) -> tuple[float, float, float, float]:
    """Clamp the crop origin into ``[0, 1 - size]`` on each axis.

    Raises:
        InvalidGeometry: If the crop has no extent on either axis
    """
    if crop.width <= 0 or crop.height <= 0:
        raise InvalidGeometry(f"Crop has non-positive size: {crop.width}x{crop.height}")

    x = min(max(crop.x, 0.0), 1.0 - crop.width)
    y = min(max(crop.y, 0.0), 1.0 - crop.height)
    return x, y, crop.width, crop.height


def aspect_label(size: Size, tolerance: float = ASPECT_TOLERANCE) -> str:
    for preset in AspectRatio:
        if abs(size.aspect - preset.ratio) <= tolerance:
            return preset.value
    divisor = gcd(size.width, size.height)
    return f"{size.width // divisor}:{size.height // divisor}"


def resolve_geometry(
    source_width: int,
    source_height: int,
    crop: CropSpec | None = None,
    target_size: Size | None = None,
    *,
    config: ReframeConfig | None = None,
) -> Geometry:
    """
    Compute the source sub-rectangle and destination canvas placement.

    With a crop, the clamped crop region is stretched over the whole
    ``crop.output_dimensions`` canvas. Without one, the canvas is
    ``target_size`` (or the configured default) and the source is either
    centre-cropped to cover it or letterboxed inside it, per
    ``config.scale_policy``.

    Args:
        source_width: Source width in pixels
        source_height: Source height in pixels
        crop: Optional normalized crop chosen by the caller
        target_size: Canvas size when no crop is given
        config: Resolver configuration

    Returns:
        Geometry with target size, source rectangle and destination rectangle

    Raises:
        InvalidGeometry: On a zero-area source or a degenerate crop
    """
    config = config or DEFAULT_CONFIG

    if source_width <= 0 or source_height <= 0:
        raise InvalidGeometry(f"Source has zero area: {source_width}x{source_height}")

    if crop is not None:
        x, y, w, h = clamp_crop(crop)
        left, top = x * source_width, y * source_height
        right = min((x + w) * source_width, float(source_width))
        bottom = min((y + h) * source_height, float(source_height))
        source_rect = Rect(x=left, y=top, width=right - left, height=bottom - top)
        if source_rect.width <= 0 or source_rect.height <= 0:
            raise InvalidGeometry("Crop resolves to an empty source region")

        target = crop.output_dimensions
        geometry = Geometry(
            target=target,
            source_rect=source_rect,
            dest_rect=Rect(x=0, y=0, width=target.width, height=target.height),
            aspect_ratio=crop.aspect_ratio.value,
        )
        logger.debug(f"Resolved crop geometry: {geometry}")
        return geometry

    target = target_size or config.default_target_size
    target_aspect = target.aspect

    if config.scale_policy is ScalePolicy.FIT:
        scale = min(target.width / source_width, target.height / source_height)
        draw_width = source_width * scale
        draw_height = source_height * scale
        source_rect = Rect(x=0, y=0, width=source_width, height=source_height)
        dest_rect = Rect(
            x=(target.width - draw_width) / 2,
            y=(target.height - draw_height) / 2,
            width=draw_width,
            height=draw_height,
        )
    else:
        crop_width, crop_height = largest_window(source_width, source_height, target_aspect)
        source_rect = Rect(
            x=(source_width - crop_width) / 2,
            y=(source_height - crop_height) / 2,
            width=crop_width,
            height=crop_height,
        )
        dest_rect = Rect(x=0, y=0, width=target.width, height=target.height)

    geometry = Geometry(
        target=target,
        source_rect=source_rect,
        dest_rect=dest_rect,
        aspect_ratio=aspect_label(target, config.aspect_tolerance),
    )
    logger.debug(f"Resolved {config.scale_policy.value} geometry: {geometry}")
    return geometry
