"""Crop selection plugin."""

from .algo.crop_selector import CropSelector
from .schema import CropSelectionState

__all__ = ["CropSelector", "CropSelectionState"]
