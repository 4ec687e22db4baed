"""Pure pixel composition: draw, scan for alpha, flatten."""

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from ....common.raster import RasterImage
from ...geometry.schema import Geometry

WHITE: tuple[int, int, int] = (255, 255, 255)
TRANSPARENT: tuple[int, int, int, int] = (0, 0, 0, 0)


def compose(
    raster: RasterImage,
    geometry: Geometry,
    *,
    resample: Image.Resampling = Image.Resampling.LANCZOS,
    fill: tuple[int, int, int, int] = TRANSPARENT,
) -> Image.Image:
    """
    Draw the resolved source sub-rectangle onto a fresh RGBA canvas.

    The canvas is cleared to ``fill`` and the scaled source is pasted over
    it unblended, so ``fill`` only shows in the padding outside the
    destination rectangle and the source keeps its own alpha.

    Args:
        raster: Source bitmap (not modified)
        geometry: Resolved source/destination rectangles
        resample: Pillow resampling filter
        fill: Padding colour outside the destination rectangle

    Returns:
        New RGBA image of ``geometry.target`` size
    """
    target_width, target_height = geometry.target.as_tuple()
    dest = geometry.dest_rect

    left = min(max(round(dest.x), 0), target_width - 1)
    top = min(max(round(dest.y), 0), target_height - 1)
    draw_width = min(max(round(dest.width), 1), target_width - left)
    draw_height = min(max(round(dest.height), 1), target_height - top)

    scaled = raster.image.resize(
        (draw_width, draw_height),
        resample,
        box=geometry.source_rect.as_box(),
    )

    canvas = Image.new("RGBA", (target_width, target_height), fill)
    canvas.paste(scaled, (left, top))
    return canvas


def alpha_channel(image: Image.Image) -> NDArray[np.uint8]:
    if "A" not in image.getbands():
        return np.full((image.height, image.width), 255, dtype=np.uint8)
    return np.asarray(image.getchannel("A"), dtype=np.uint8)


def has_transparency(image: Image.Image) -> bool:
    """True iff any pixel's alpha is below 255."""
    return bool((alpha_channel(image) < 255).any())


def flatten(image: Image.Image, background: tuple[int, int, int] = WHITE) -> Image.Image:
    """Composite ``image`` over an opaque background into a new RGB image."""
    base = Image.new("RGB", image.size, background)
    if "A" in image.getbands():
        base.paste(image, mask=image.getchannel("A"))
    else:
        base.paste(image)
    return base
