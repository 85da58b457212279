"""
Tests for core.models

Test Coverage:
- PaperSize / ImageRef validation
- Transform point mapping
- Placeholder state transitions
"""
import pytest

from cover_printer.core.models import (
    IDENTITY,
    PAPER_SIZES,
    EmptyState,
    FilledState,
    GridParameters,
    ImageRef,
    PaperSize,
    Placeholder,
    PlaceholderSlot,
    Transform,
)


@pytest.fixture
def slot():
    return PlaceholderSlot(0, left_mm=4, top_mm=5.5, width_mm=45, height_mm=45)


class TestPaperSize:
    def test_supported_sizes(self):
        assert [(p.width_cm, p.height_cm) for p in PAPER_SIZES] == [(10, 15), (13, 18)]

    def test_rejects_non_positive_dimensions(self):
        with pytest.raises(ValueError):
            PaperSize("bad", 0, 15)
        with pytest.raises(ValueError):
            PaperSize("bad", 10, -1)


class TestGridParameters:
    def test_defaults(self):
        params = GridParameters()
        assert (params.picture_width_mm, params.picture_height_mm) == (45.0, 45.0)
        assert params.allow_whitespace is False

    def test_equal_values_compare_equal(self):
        assert GridParameters(45, 45, 4, 2) == GridParameters(45.0, 45.0, 4.0, 2.0)


class TestImageRef:
    def test_rejects_zero_size(self):
        with pytest.raises(ValueError):
            ImageRef(handle=None, natural_width=0, natural_height=10)

    def test_equality_ignores_handle(self):
        assert ImageRef(object(), 10, 20) == ImageRef(object(), 10, 20)


class TestTransform:
    def test_map_point_scales_then_translates(self):
        t = Transform(0, -85, 1.7)
        assert t.map_point(100, 200) == pytest.approx((170.0, 255.0))

    def test_image_point_inverts_map_point(self):
        t = Transform(12.5, -3.0, 2.0)
        x, y = t.map_point(7, 9)
        assert t.image_point(x, y) == pytest.approx((7, 9))


class TestPlaceholder:
    def test_when_empty_then_reports_identity(self, slot):
        ph = Placeholder(slot)
        assert isinstance(ph.state, EmptyState)
        assert ph.transform is IDENTITY
        assert ph.image is None

    def test_when_empty_then_set_transform_is_noop(self, slot):
        ph = Placeholder(slot)
        assert ph.set_transform(Transform(1, 2, 3)) is False
        assert not ph.is_filled

    def test_when_filled_then_set_transform_updates(self, slot, make_image_ref):
        # Arrange
        ph = Placeholder(slot)
        ph.fill(make_image_ref(), Transform(0, 0, 1))

        # Act
        changed = ph.set_transform(Transform(-5, 0, 1))

        # Assert
        assert changed is True
        assert isinstance(ph.state, FilledState)
        assert ph.transform == Transform(-5, 0, 1)

    def test_when_transform_unchanged_then_returns_false(self, slot, make_image_ref):
        ph = Placeholder(slot)
        ph.fill(make_image_ref(), Transform(0, 0, 1))
        assert ph.set_transform(Transform(0, 0, 1)) is False

    def test_clear(self, slot, make_image_ref):
        ph = Placeholder(slot)
        ph.fill(make_image_ref(), IDENTITY)
        assert ph.clear() is True
        assert ph.clear() is False
        assert ph.transform is IDENTITY

    def test_slot_edges(self, slot):
        assert slot.right_mm == 49.0
        assert slot.bottom_mm == 50.5
