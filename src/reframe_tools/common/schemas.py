"""Shared value types used across plugins."""

import math
from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13, -12.5 -> -12)."""
    return math.floor(value + 0.5)

# ─────────────────────────────────────────────────────────────
# Dimensions
# ─────────────────────────────────────────────────────────────


class Size(BaseModel):
    """Pixel dimensions of a canvas."""

    width: int = Field(gt=0, description="Width in pixels")
    height: int = Field(gt=0, description="Height in pixels")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def aspect(self) -> float:
        return self.width / self.height

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)


class Rect(BaseModel):
    """Axis-aligned rectangle in pixel units (floats allowed for sub-pixel crops)."""

    x: float
    y: float
    width: float
    height: float

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def as_box(self) -> tuple[float, float, float, float]:
        """(left, upper, right, lower) as Pillow expects for ``box`` arguments."""
        return (self.x, self.y, self.right, self.bottom)


# ─────────────────────────────────────────────────────────────
# Enumerations
# ─────────────────────────────────────────────────────────────


class OutputFormat(StrEnum):
    JPEG = "JPEG"
    PNG = "PNG"
    WEBP = "WEBP"

    @classmethod
    def parse(cls, value: "str | OutputFormat") -> "OutputFormat":
        """Accept Pillow names, extensions and MIME subtypes (``jpg``, ``image/webp``...)."""
        if isinstance(value, OutputFormat):
            return value
        key = value.strip().lower().removeprefix("image/").lstrip(".")
        aliases = {"jpg": cls.JPEG, "jpeg": cls.JPEG, "png": cls.PNG, "webp": cls.WEBP}
        if key not in aliases:
            raise ValueError(f"Unsupported output format: {value!r}")
        return aliases[key]

    @property
    def supports_alpha(self) -> bool:
        return self is not OutputFormat.JPEG

    @property
    def mime_type(self) -> str:
        return f"image/{self.value.lower()}"

    @property
    def extension(self) -> str:
        return ".jpg" if self is OutputFormat.JPEG else f".{self.value.lower()}"


class AspectRatio(StrEnum):
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"
    SQUARE = "1:1"

    @property
    def ratio(self) -> float:
        w, h = self.value.split(":")
        return int(w) / int(h)

    @property
    def output_dimensions(self) -> Size:
        return _PRESET_DIMENSIONS[self]


_PRESET_DIMENSIONS: dict[AspectRatio, Size] = {
    AspectRatio.LANDSCAPE: Size(width=1920, height=1080),
    AspectRatio.PORTRAIT: Size(width=1080, height=1920),
    AspectRatio.SQUARE: Size(width=1080, height=1080),
}


class ScalePolicy(StrEnum):
    """How an uncropped source is mapped onto the target canvas."""

    COVER = "cover"
    FIT = "fit"
