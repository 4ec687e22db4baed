"""Interactive crop window, modelled as a small state machine.

The selector owns all mutable drag/zoom state. The engine only ever sees
the immutable CropSpec returned by :meth:`CropSelector.confirm`.
"""

from loguru import logger

from ....common.errors import CropStateError, InvalidGeometry
from ....common.schemas import AspectRatio
from ...geometry.algo.geometry_resolver import largest_window, needs_cropping
from ...geometry.schema import ASPECT_TOLERANCE, CropSpec
from ..schema import MAX_ZOOM, MIN_ZOOM, WHEEL_ZOOM_STEP, CropSelectionState


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class CropSelector:
    """Tracks aspect preset, zoom and window centre for one source image.

    States go ``idle -> dragging -> idle`` while the user moves the window
    and ``idle|dragging -> confirmed`` once. Only :meth:`reset` leaves
    ``confirmed``.
    """

    def __init__(
        self,
        source_width: int,
        source_height: int,
        aspect_ratio: AspectRatio = AspectRatio.LANDSCAPE,
        tolerance: float = ASPECT_TOLERANCE,
    ) -> None:
        if source_width <= 0 or source_height <= 0:
            raise InvalidGeometry(f"Source has zero area: {source_width}x{source_height}")

        self.source_width: int = source_width
        self.source_height: int = source_height
        self.tolerance: float = tolerance
        self.aspect_ratio: AspectRatio = aspect_ratio
        self.zoom: float = MIN_ZOOM
        self.center: tuple[float, float] = (0.5, 0.5)
        self.state: CropSelectionState = CropSelectionState.IDLE

    # ---------------------------
    # Derived window
    # ---------------------------
    @property
    def needs_cropping(self) -> bool:
        return needs_cropping(
            self.source_width, self.source_height, self.aspect_ratio, self.tolerance
        )

    def should_skip(self) -> bool:
        """No crop UI is needed when the ratio already matches and nothing is zoomed."""
        return not self.needs_cropping and self.zoom == MIN_ZOOM

    def window_size(self) -> tuple[float, float]:
        """Crop window in source pixels."""
        width, height = largest_window(
            self.source_width, self.source_height, self.aspect_ratio.ratio
        )
        width = min(width / self.zoom, self.source_width)
        height = min(height / self.zoom, self.source_height)
        return width, height

    def window_origin(self) -> tuple[float, float]:
        """Normalized top-left corner, kept inside the source."""
        width, height = self.window_size()
        norm_width = width / self.source_width
        norm_height = height / self.source_height
        x = _clamp(self.center[0] - norm_width / 2, 0.0, 1.0 - norm_width)
        y = _clamp(self.center[1] - norm_height / 2, 0.0, 1.0 - norm_height)
        return x, y

    # ---------------------------
    # Settings (not allowed once confirmed)
    # ---------------------------
    def _require_open(self, action: str) -> None:
        if self.state is CropSelectionState.CONFIRMED:
            raise CropStateError(f"Cannot {action} after the crop was confirmed")

    def set_aspect_ratio(self, aspect_ratio: AspectRatio | str) -> None:
        self._require_open("change aspect ratio")
        self.aspect_ratio = AspectRatio(aspect_ratio)
        self.zoom = MIN_ZOOM

    def set_zoom(self, level: float) -> None:
        self._require_open("zoom")
        self.zoom = _clamp(level, MIN_ZOOM, MAX_ZOOM)

    def zoom_by(self, delta: float) -> None:
        self.set_zoom(self.zoom + delta)

    def wheel(self, delta_y: float) -> None:
        """Scrolling down zooms out, scrolling up zooms in."""
        self.zoom_by(-WHEEL_ZOOM_STEP if delta_y > 0 else WHEEL_ZOOM_STEP)

    # ---------------------------
    # Drag transitions
    # ---------------------------
    def begin_drag(self) -> None:
        if self.state is not CropSelectionState.IDLE:
            raise CropStateError(f"Cannot start dragging from {self.state.value}")
        self.state = CropSelectionState.DRAGGING

    def drag_to(self, x: float, y: float) -> None:
        """Move the window centre to a normalized point on the source."""
        if self.state is not CropSelectionState.DRAGGING:
            raise CropStateError(f"Cannot drag while {self.state.value}")
        self.center = (_clamp(x, 0.0, 1.0), _clamp(y, 0.0, 1.0))

    def end_drag(self) -> None:
        if self.state is not CropSelectionState.DRAGGING:
            raise CropStateError(f"Cannot end a drag while {self.state.value}")
        self.state = CropSelectionState.IDLE

    def confirm(self) -> CropSpec:
        self._require_open("confirm")

        x, y = self.window_origin()
        width, height = self.window_size()
        crop = CropSpec(
            x=x,
            y=y,
            width=width / self.source_width,
            height=height / self.source_height,
            aspect_ratio=self.aspect_ratio,
            output_dimensions=self.aspect_ratio.output_dimensions,
        )
        self.state = CropSelectionState.CONFIRMED
        logger.debug(f"Crop confirmed: {crop}")
        return crop

    def reset(self) -> None:
        self.zoom = MIN_ZOOM
        self.center = (0.5, 0.5)
        self.state = CropSelectionState.IDLE
