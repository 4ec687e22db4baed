"""Tunable constants for geometry resolution and the compression search."""

import os
from typing import ClassVar, Literal

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

from .schemas import ScalePolicy, Size

ResampleName = Literal["bilinear", "bicubic", "lanczos"]

_RESAMPLE_FILTERS: dict[str, Image.Resampling] = {
    "bilinear": Image.Resampling.BILINEAR,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}


class ReframeConfig(BaseModel):
    """Configuration shared by the resolver and the engine.

    Attributes:
        default_target_size: Canvas used when no crop (and no explicit target) is given
        scale_policy: ``cover`` crops to fill, ``fit`` letterboxes with ``letterbox_fill``
        resample: Pillow resampling filter used during composition
        quality_ladder: Candidate qualities swept before the minimum quality
        min_quality: Last ladder rung for sources up to ``large_source_kb``
        large_source_kb / large_min_quality: Threshold and rung for large sources
        huge_source_kb / huge_min_quality: Threshold and rung for very large sources
        fallback_quality: Quality used when no candidate beats the source size
        small_file_kb / small_file_quality: Extra attempt for tiny sources that grew
        max_workers: Concurrent encoders for the sweep (1 = sequential)
        png_optimize: Pass ``optimize=True`` to the PNG encoder
        aspect_tolerance: Drift allowed when labelling a target canvas with a preset ratio name
    """

    default_target_size: Size = Size(width=1920, height=1080)
    scale_policy: ScalePolicy = ScalePolicy.COVER
    letterbox_fill: tuple[int, int, int, int] = (0, 0, 0, 255)
    resample: ResampleName = "lanczos"

    quality_ladder: tuple[int, ...] = (95, 85, 75, 65, 55, 45, 35)
    min_quality: int = Field(default=30, ge=1, le=100)
    large_source_kb: float = 1000
    large_min_quality: int = Field(default=25, ge=1, le=100)
    huge_source_kb: float = 2000
    huge_min_quality: int = Field(default=20, ge=1, le=100)
    fallback_quality: int = Field(default=95, ge=1, le=100)
    small_file_kb: float = 100
    small_file_quality: int = Field(default=98, ge=1, le=100)

    max_workers: int = Field(default=4, ge=1)
    png_optimize: bool = True
    aspect_tolerance: float = Field(default=0.01, ge=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def resample_filter(self) -> Image.Resampling:
        return _RESAMPLE_FILTERS[self.resample]

    @classmethod
    def from_env(cls, prefix: str = "REFRAME_") -> "ReframeConfig":
        """Build a config, overriding defaults from ``REFRAME_*`` environment variables."""
        overrides: dict[str, object] = {}

        max_workers = os.environ.get(f"{prefix}MAX_WORKERS")
        if max_workers:
            overrides["max_workers"] = int(max_workers)

        scale_policy = os.environ.get(f"{prefix}SCALE_POLICY")
        if scale_policy:
            overrides["scale_policy"] = scale_policy.lower()

        resample = os.environ.get(f"{prefix}RESAMPLE")
        if resample:
            overrides["resample"] = resample.lower()

        png_optimize = os.environ.get(f"{prefix}PNG_OPTIMIZE")
        if png_optimize:
            overrides["png_optimize"] = png_optimize.lower() in ("1", "true", "yes", "on")

        return cls.model_validate(overrides)


DEFAULT_CONFIG = ReframeConfig()
