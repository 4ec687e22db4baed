"""Synthetic media helpers shared by fixtures and tests."""

from io import BytesIO

import numpy as np
from PIL import Image


def encode_as(image: Image.Image, fmt: str, **kwargs: object) -> bytes:
    buffer = BytesIO()
    image.save(buffer, fmt, **kwargs)
    return buffer.getvalue()


def encode_png(image: Image.Image) -> bytes:
    return encode_as(image, "PNG")


def gradient_image(width: int, height: int, noise: int = 12, seed: int = 7) -> Image.Image:
    """Opaque RGB gradient with mild noise: realistic enough for JPEG size tests."""
    rng = np.random.default_rng(seed)
    xs = np.linspace(0, 255, width, dtype=np.float32)
    ys = np.linspace(0, 255, height, dtype=np.float32)
    red = np.tile(xs, (height, 1))
    green = np.tile(ys[:, None], (1, width))
    blue = (red + green) / 2
    pixels = np.stack([red, green, blue], axis=-1)
    pixels += rng.integers(-noise, noise + 1, size=pixels.shape)
    return Image.fromarray(np.clip(pixels, 0, 255).astype(np.uint8), "RGB")


def noise_image(width: int, height: int, seed: int = 3) -> Image.Image:
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    return Image.fromarray(pixels, "RGB")
