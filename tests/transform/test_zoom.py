"""
Tests for transform.zoom

Test Coverage:
- Anchoring keeps the image point under the cursor fixed
- Minimum cover scale and pan clamp when whitespace is disallowed
- Wheel delta -> direction
"""
import pytest

from cover_printer.core.models import Transform
from cover_printer.transform import (
    ZOOM_STEP,
    ZoomDirection,
    constrain_axis,
    direction_from_wheel_delta,
    zoom_at,
)


class TestZoomAnchoring:
    @pytest.mark.parametrize("cursor", [(0, 0), (85, 85), (30, 120), (170, 170)])
    @pytest.mark.parametrize("direction", list(ZoomDirection))
    def test_when_whitespace_allowed_then_point_under_cursor_is_fixed(self, cursor, direction):
        # Arrange
        before = Transform(10, -40, 1.3)
        image_point = before.image_point(*cursor)

        # Act
        after = zoom_at(*cursor, before, direction, 100, 200, 170, 170, allow_whitespace=True)

        # Assert
        assert after.scale == pytest.approx(1.3 * direction.factor)
        assert after.map_point(*image_point) == pytest.approx(cursor)

    def test_zoom_in_inside_clamp_range_stays_anchored(self):
        """A small zoom in the middle of a covered image needs no clamping."""
        before = Transform(0, -85, 1.7)
        image_point = before.image_point(85, 85)

        after = zoom_at(85, 85, before, ZoomDirection.IN, 100, 200, 170, 170, allow_whitespace=False)

        assert after.scale == pytest.approx(1.7 * ZOOM_STEP)
        assert after.map_point(*image_point) == pytest.approx((85, 85))


class TestZoomWithoutWhitespace:
    def test_when_zooming_out_at_cover_scale_then_scale_is_kept(self):
        before = Transform(0, -85, 1.7)

        after = zoom_at(85, 85, before, ZoomDirection.OUT, 100, 200, 170, 170, allow_whitespace=False)

        assert after.scale == pytest.approx(1.7)
        assert after.offset_x == pytest.approx(0)
        assert -170 <= after.offset_y <= 0

    @pytest.mark.parametrize("cursor", [(0, 0), (170, 170), (10, 160)])
    def test_result_covers_container(self, cursor):
        t = Transform(0, -85, 1.7)
        for direction in (ZoomDirection.IN, ZoomDirection.IN, ZoomDirection.OUT, ZoomDirection.OUT):
            t = zoom_at(*cursor, t, direction, 100, 200, 170, 170, allow_whitespace=False)
            assert t.offset_x <= 1e-9 and t.offset_x + 100 * t.scale >= 170 - 1e-9
            assert t.offset_y <= 1e-9 and t.offset_y + 200 * t.scale >= 170 - 1e-9

    def test_result_is_fixed_point_of_pan_constraint(self):
        t = zoom_at(160, 10, Transform(0, -85, 1.7), ZoomDirection.IN, 100, 200, 170, 170, False)
        assert constrain_axis(t.offset_x, 170, 100 * t.scale, False) == pytest.approx(t.offset_x)
        assert constrain_axis(t.offset_y, 170, 200 * t.scale, False) == pytest.approx(t.offset_y)


def test_non_positive_scale_is_returned_unchanged():
    t = Transform(0, 0, 0)
    assert zoom_at(10, 10, t, ZoomDirection.IN, 100, 200, 170, 170, False) is t


@pytest.mark.parametrize("delta, expected", [(120, ZoomDirection.IN), (-120, ZoomDirection.OUT), (0, None)])
def test_direction_from_wheel_delta(delta, expected):
    assert direction_from_wheel_delta(delta) is expected
