"""Typed failures raised by the reframe engine.

All three are terminal for a conversion call: nothing is retried and no
partial result is returned.
"""

from typing_extensions import override


class ReframeError(Exception):
    """Base class for every failure surfaced by reframe_tools."""

    def __init__(self, message: str = "An unknown reframe error occurred."):
        self.message: str = message
        super().__init__(self.message)

    @override
    def __str__(self):
        return f"{type(self).__name__}: {self.message}"


class DecodeError(ReframeError):
    """Source bytes are not a valid or supported raster."""


class InvalidGeometry(ReframeError):
    """Degenerate or out-of-bounds crop or dimensions."""


class EncodeError(ReframeError):
    """Target format/quality combination cannot be produced."""


class CropStateError(ReframeError):
    """Crop selection received an event its current state does not accept."""
