"""Decoded bitmap borrowed by the engine for one conversion call."""

from typing import ClassVar

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RasterImage(BaseModel):
    """RGBA bitmap plus the byte length of the encoded file it came from.

    The wrapped Pillow image is never mutated by reframe_tools; composition
    always draws into a fresh surface.
    """

    image: Image.Image
    byte_length: int = Field(gt=0, description="Size of the encoded source in bytes")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("image")
    @classmethod
    def ensure_rgba(cls, v: Image.Image) -> Image.Image:
        if v.mode != "RGBA":
            return v.convert("RGBA")
        return v

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size_kb(self) -> float:
        return self.byte_length / 1024
