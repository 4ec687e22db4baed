"""Crop and placement schemas for the geometry resolver."""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ...common.schemas import AspectRatio, Rect, Size

ASPECT_TOLERANCE = 0.01


class CropSpec(BaseModel):
    """Normalized crop rectangle chosen by the caller.

    Attributes:
        x, y: Top-left corner as a fraction of the source width/height
        width, height: Crop extent as a fraction of the source width/height
        aspect_ratio: Preset the crop was drawn for
        output_dimensions: Exact pixel size of the final raster; defaults to the preset's size
    """

    x: float = Field(ge=0.0, le=1.0)
    y: float = Field(ge=0.0, le=1.0)
    width: float = Field(ge=0.0, le=1.0)
    height: float = Field(ge=0.0, le=1.0)
    aspect_ratio: AspectRatio = AspectRatio.LANDSCAPE
    output_dimensions: Size

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def default_output_dimensions(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("output_dimensions") is None:
            aspect = AspectRatio(data.get("aspect_ratio", AspectRatio.LANDSCAPE))
            return {**data, "output_dimensions": aspect.output_dimensions}
        return data

    @model_validator(mode="after")
    def validate_output_ratio(self) -> "CropSpec":
        """Output dimensions must carry the nominal ratio of the preset."""
        if abs(self.output_dimensions.aspect - self.aspect_ratio.ratio) > ASPECT_TOLERANCE:
            raise ValueError(
                f"Output dimensions {self.output_dimensions.width}x"
                + f"{self.output_dimensions.height} do not match aspect ratio "
                + f"{self.aspect_ratio.value}"
            )
        return self


class Geometry(BaseModel):
    """Where the source is sampled from and where it lands on the canvas."""

    target: Size
    source_rect: Rect
    dest_rect: Rect
    aspect_ratio: str = Field(description="Label of the output ratio, e.g. '16:9'")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def target_width(self) -> int:
        return self.target.width

    @property
    def target_height(self) -> int:
        return self.target.height

    @property
    def is_letterboxed(self) -> bool:
        return (
            self.dest_rect.x > 0
            or self.dest_rect.y > 0
            or self.dest_rect.width < self.target.width
            or self.dest_rect.height < self.target.height
        )
