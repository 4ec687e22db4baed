"""Test configuration and fixtures for reframe_tools.

All media is synthesised in-process with Pillow and numpy, so the suite
needs no checked-in fixtures:
- Session-scoped fixtures for the large end-to-end sources
- Function-scoped factories for small rasters and encoded bytes
"""

from collections.abc import Callable

import numpy as np
import pytest
from PIL import Image

from reframe_tools.common.config import ReframeConfig
from reframe_tools.common.raster import RasterImage

from tests.media import encode_png, gradient_image

# ============================================================================
# Session-Scoped Fixtures (Run Once)
# ============================================================================


@pytest.fixture(scope="session")
def wide_png_bytes() -> bytes:
    """4000x2000 opaque PNG."""
    return encode_png(gradient_image(4000, 2000))


@pytest.fixture(scope="session")
def transparent_corner_png_bytes() -> bytes:
    """1000x1000 PNG whose top-left 500x500 quadrant is fully transparent."""
    img = gradient_image(1000, 1000).convert("RGBA")
    alpha = np.full((1000, 1000), 255, dtype=np.uint8)
    alpha[:500, :500] = 0
    img.putalpha(Image.fromarray(alpha, "L"))
    return encode_png(img)


# ============================================================================
# Function-Scoped Fixtures (Run Per Test)
# ============================================================================


@pytest.fixture
def make_raster() -> Callable[..., RasterImage]:
    """Factory: RasterImage from a synthetic gradient, with its real PNG size."""

    def factory(
        width: int = 320,
        height: int = 180,
        *,
        alpha: int | None = None,
        byte_length: int | None = None,
    ) -> RasterImage:
        img = gradient_image(width, height).convert("RGBA")
        if alpha is not None:
            img.putalpha(alpha)
        size = byte_length if byte_length is not None else len(encode_png(img))
        return RasterImage(image=img, byte_length=size)

    return factory


@pytest.fixture
def small_config() -> ReframeConfig:
    """Sequential config with a fast PNG encoder, for unit-sized tests."""
    return ReframeConfig(max_workers=1, png_optimize=False, resample="bilinear")
