"""Crop selection state."""

from enum import StrEnum

MIN_ZOOM = 1.0
MAX_ZOOM = 3.0
WHEEL_ZOOM_STEP = 0.1


class CropSelectionState(StrEnum):
    IDLE = "idle"
    DRAGGING = "dragging"
    CONFIRMED = "confirmed"
