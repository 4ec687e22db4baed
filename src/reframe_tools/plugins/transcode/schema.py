"""Conversion request and result schemas."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...common.raster import RasterImage
from ...common.schemas import OutputFormat, Size, round_half_up
from ..geometry.schema import CropSpec


class ConversionRequest(BaseModel):
    """Everything the engine needs for one conversion.

    Attributes:
        source: Decoded source bitmap and its encoded byte length
        crop: Optional normalized crop; when present it also fixes the canvas size
        target_quality: Pins the lossy quality and skips the search
        output_format: Requested format; JPEG is forced to PNG for transparent output
        target_size: Canvas size when no crop is given (defaults to the config's 1920x1080)
        lossless: Encode WEBP losslessly (PNG is always lossless)
    """

    source: RasterImage
    crop: CropSpec | None = None
    target_quality: int | None = Field(default=None, ge=1, le=100)
    output_format: OutputFormat = OutputFormat.JPEG
    target_size: Size | None = None
    lossless: bool = False

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @field_validator("output_format", mode="before")
    @classmethod
    def parse_output_format(cls, v: str | OutputFormat) -> OutputFormat:
        return OutputFormat.parse(v)


class ConversionResult(BaseModel):
    """Encoded output of a conversion; ownership passes to the caller."""

    data: bytes = Field(repr=False)
    width: int
    height: int
    format: OutputFormat
    quality: int = Field(ge=0, le=100, description="Encode quality, 100 for lossless")
    has_transparency: bool
    original_size_bytes: int
    compression_ratio_percent: int = Field(
        description="(1 - size/original) * 100 rounded half up; negative when the output grew"
    )
    aspect_ratio: str

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def size_kb(self) -> int:
        return round_half_up(self.size_bytes / 1024)

    @property
    def original_size_kb(self) -> int:
        return round_half_up(self.original_size_bytes / 1024)

    @property
    def mime_type(self) -> str:
        return self.format.mime_type

    @property
    def extension(self) -> str:
        return self.format.extension
