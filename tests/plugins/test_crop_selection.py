"""Unit tests for the crop selection state machine."""

import pytest

from reframe_tools.common.errors import CropStateError, InvalidGeometry
from reframe_tools.common.schemas import AspectRatio
from reframe_tools.plugins.crop_selection.algo.crop_selector import CropSelector
from reframe_tools.plugins.crop_selection.schema import MAX_ZOOM, MIN_ZOOM, CropSelectionState
from reframe_tools.plugins.geometry.algo.geometry_resolver import resolve_geometry

# ============================================================================
# WINDOW TESTS
# ============================================================================


def test_default_window_is_centred_full_height():
    """Test a 16:9 window on a square source spans the full width, centred."""
    selector = CropSelector(1000, 1000)

    width, height = selector.window_size()
    x, y = selector.window_origin()

    assert width == 1000
    assert height == pytest.approx(562.5)
    assert x == 0
    assert y == pytest.approx((1 - 0.5625) / 2)


def test_zoom_shrinks_window():
    """Test zooming divides the window by the zoom level."""
    selector = CropSelector(2000, 1000, AspectRatio.SQUARE)
    selector.set_zoom(2.0)

    assert selector.window_size() == (500, 500)


def test_zoom_is_clamped():
    """Test zoom stays inside [1, 3]."""
    selector = CropSelector(100, 100)

    selector.set_zoom(10)
    assert selector.zoom == MAX_ZOOM

    selector.zoom_by(-10)
    assert selector.zoom == MIN_ZOOM


def test_wheel_steps_zoom():
    """Test scrolling up zooms in and scrolling down zooms out by 0.1."""
    selector = CropSelector(100, 100)

    selector.wheel(-1)
    selector.wheel(-1)
    assert selector.zoom == pytest.approx(1.2)

    selector.wheel(1)
    assert selector.zoom == pytest.approx(1.1)


def test_changing_aspect_ratio_resets_zoom():
    """Test switching presets resets zoom to 1."""
    selector = CropSelector(1600, 900)
    selector.set_zoom(2.5)

    selector.set_aspect_ratio("9:16")

    assert selector.aspect_ratio is AspectRatio.PORTRAIT
    assert selector.zoom == MIN_ZOOM


def test_should_skip_when_ratio_already_matches():
    """Test no crop UI is needed for an already-16:9 source at zoom 1."""
    selector = CropSelector(1920, 1080)

    assert selector.should_skip() is True

    selector.set_zoom(1.5)
    assert selector.should_skip() is False


def test_zero_area_source_rejected():
    """Test the selector refuses empty sources."""
    with pytest.raises(InvalidGeometry):
        _ = CropSelector(0, 100)


# ============================================================================
# STATE MACHINE TESTS
# ============================================================================


def test_drag_moves_window_and_clamps_to_source():
    """Test dragging to a corner pins the window against the edges."""
    selector = CropSelector(2000, 1000, AspectRatio.SQUARE)

    selector.begin_drag()
    assert selector.state is CropSelectionState.DRAGGING

    selector.drag_to(1.5, -0.2)
    selector.end_drag()

    assert selector.state is CropSelectionState.IDLE
    assert selector.center == (1.0, 0.0)
    assert selector.window_origin() == (0.5, 0.0)


def test_drag_requires_dragging_state():
    """Test drag_to and end_drag are rejected while idle."""
    selector = CropSelector(100, 100)

    with pytest.raises(CropStateError):
        selector.drag_to(0.1, 0.1)
    with pytest.raises(CropStateError):
        selector.end_drag()


def test_begin_drag_twice_is_rejected():
    """Test a second begin_drag without end_drag fails."""
    selector = CropSelector(100, 100)
    selector.begin_drag()

    with pytest.raises(CropStateError):
        selector.begin_drag()


def test_confirm_produces_valid_crop_spec():
    """Test confirm returns a CropSpec matching the window and preset."""
    selector = CropSelector(4000, 2000, AspectRatio.SQUARE)
    selector.begin_drag()
    selector.drag_to(0.25, 0.5)
    selector.end_drag()

    crop = selector.confirm()

    assert selector.state is CropSelectionState.CONFIRMED
    assert crop.aspect_ratio is AspectRatio.SQUARE
    assert crop.output_dimensions.as_tuple() == (1080, 1080)
    assert crop.width == pytest.approx(0.5)
    assert crop.height == pytest.approx(1.0)
    assert crop.x == pytest.approx(0.0)
    assert crop.y == pytest.approx(0.0)


def test_confirm_while_dragging_is_allowed():
    """Test confirming mid-drag finishes the selection."""
    selector = CropSelector(500, 500)
    selector.begin_drag()

    _ = selector.confirm()

    assert selector.state is CropSelectionState.CONFIRMED


def test_confirmed_selection_is_frozen_until_reset():
    """Test a confirmed selector rejects changes until reset."""
    selector = CropSelector(500, 300)
    _ = selector.confirm()

    with pytest.raises(CropStateError):
        _ = selector.confirm()
    with pytest.raises(CropStateError):
        selector.set_zoom(2)
    with pytest.raises(CropStateError):
        selector.begin_drag()

    selector.reset()
    assert selector.state is CropSelectionState.IDLE
    assert selector.center == (0.5, 0.5)


@pytest.mark.parametrize("aspect", list(AspectRatio))
@pytest.mark.parametrize("zoom", [1.0, 1.7, 3.0])
@pytest.mark.parametrize(("width", "height"), [(4000, 2000), (1000, 3000), (777, 777)])
def test_confirmed_crop_resolves_inside_source(
    aspect: AspectRatio, zoom: float, width: int, height: int
):
    """Test every confirmed crop resolves to a region inside the source."""
    selector = CropSelector(width, height, aspect)
    selector.set_zoom(zoom)
    selector.begin_drag()
    selector.drag_to(0.9, 0.1)

    crop = selector.confirm()
    rect = resolve_geometry(width, height, crop).source_rect

    assert rect.x >= 0 and rect.y >= 0
    assert rect.right <= width and rect.bottom <= height
    assert rect.width / rect.height == pytest.approx(aspect.ratio, rel=1e-6)
