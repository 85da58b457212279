"""
Tests for layout.grid

Test Coverage:
- count_fitting(): Per-axis formula and degenerate input
- compute_grid(): Reference scenario, centering, paper bounds
- Degenerate parameters yield an empty grid with warnings
"""
import math

import pytest

from cover_printer.core.models import PAPER_SIZES, GridParameters, PaperSize
from cover_printer.layout import GridLayout, compute_grid, count_fitting

PAPER_10X15 = PAPER_SIZES[0]
PAPER_13X18 = PAPER_SIZES[1]


class TestCountFitting:
    def test_reference_axes(self):
        """92 mm fits 2 of 45 + 2; 142 mm fits 3."""
        assert count_fitting(92, 45, 2) == 2
        assert count_fitting(142, 45, 2) == 3

    def test_exact_fit_needs_no_trailing_gap(self):
        """n items need n - 1 gaps: 3*30 + 2*5 = 100."""
        assert count_fitting(100, 30, 5) == 3

    def test_when_item_larger_than_available_then_zero(self):
        assert count_fitting(40, 45, 2) == 0

    @pytest.mark.parametrize("item, spacing", [(0, 2), (-5, 2), (45, -1)])
    def test_degenerate_inputs_return_zero(self, item, spacing):
        assert count_fitting(92, item, spacing) == 0

    def test_non_finite_available_returns_zero(self):
        assert count_fitting(math.inf, 45, 2) == 0


class TestComputeGridScenario:
    def test_when_10x15_with_45mm_pictures_then_two_by_three(self):
        # Arrange
        params = GridParameters(45, 45, 4, 2)

        # Act
        layout = compute_grid(PAPER_10X15, params)

        # Assert
        assert isinstance(layout, GridLayout)
        assert (layout.columns, layout.rows) == (2, 3)
        assert layout.total_width_mm == pytest.approx(92)
        assert layout.total_height_mm == pytest.approx(139)
        assert layout.offset_x_mm == pytest.approx(4.0)
        assert layout.offset_y_mm == pytest.approx(5.5)
        assert layout.placeholder_count == 6
        assert layout.warnings == ()

    def test_slots_are_row_major(self):
        layout = compute_grid(PAPER_10X15, GridParameters(45, 45, 4, 2))

        ids = [slot.id for slot in layout.slots]
        assert ids == list(range(6))
        # Slot 1 is the second column of the first row
        assert layout.slots[1].left_mm == pytest.approx(4 + 47)
        assert layout.slots[1].top_mm == pytest.approx(5.5)
        # Slot 2 starts the second row
        assert layout.slots[2].left_mm == pytest.approx(4)
        assert layout.slots[2].top_mm == pytest.approx(5.5 + 47)

    def test_is_deterministic(self):
        params = GridParameters(30, 40, 5, 3)
        assert compute_grid(PAPER_13X18, params) == compute_grid(PAPER_13X18, params)


class TestComputeGridInvariants:
    @pytest.mark.parametrize("paper", PAPER_SIZES)
    @pytest.mark.parametrize(
        "params",
        [
            GridParameters(45, 45, 4, 2),
            GridParameters(30, 40, 5, 3),
            GridParameters(25, 25, 0, 0),
            GridParameters(60, 35, 7.5, 1.25),
            GridParameters(89, 127, 5, 2),
        ],
    )
    def test_grid_is_centered_and_inside_paper(self, paper, params):
        layout = compute_grid(paper, params)
        paper_w = paper.width_cm * 10
        paper_h = paper.height_cm * 10

        assert layout.rows >= 1 and layout.columns >= 1
        # Centered: equal space on opposite sides
        right_space = paper_w - (layout.offset_x_mm + layout.total_width_mm)
        bottom_space = paper_h - (layout.offset_y_mm + layout.total_height_mm)
        assert layout.offset_x_mm == pytest.approx(right_space)
        assert layout.offset_y_mm == pytest.approx(bottom_space)
        # Inside margins
        for slot in layout.slots:
            assert slot.left_mm >= params.margin_mm - 1e-9
            assert slot.top_mm >= params.margin_mm - 1e-9
            assert slot.right_mm <= paper_w - params.margin_mm + 1e-9
            assert slot.bottom_mm <= paper_h - params.margin_mm + 1e-9

    def test_one_more_column_would_not_fit(self):
        params = GridParameters(30, 40, 5, 3)
        layout = compute_grid(PAPER_13X18, params)
        available = 130 - 2 * params.margin_mm
        wider = (layout.columns + 1) * params.picture_width_mm + layout.columns * params.spacing_mm
        assert wider > available


class TestComputeGridDegenerate:
    @pytest.mark.parametrize(
        "params",
        [
            GridParameters(0, 45, 4, 2),
            GridParameters(45, -1, 4, 2),
            GridParameters(45, 45, -1, 2),
            GridParameters(45, 45, 4, -2),
            GridParameters(45, 45, 50, 2),
            GridParameters(200, 45, 4, 2),
        ],
    )
    def test_when_degenerate_then_empty_grid_with_warning(self, params, caplog):
        # Act
        with caplog.at_level("WARNING", logger="cover_printer.layout.grid"):
            layout = compute_grid(PAPER_10X15, params)

        # Assert
        assert layout.is_empty
        assert layout.rows == 0 and layout.columns == 0
        assert layout.warnings
        assert "Empty grid" in caplog.text

    def test_slot_lookup_outside_grid_raises(self):
        layout = compute_grid(PAPER_10X15, GridParameters(45, 45, 4, 2))
        assert layout.slot(5).id == 5
        with pytest.raises(IndexError):
            layout.slot(6)

    def test_custom_paper(self):
        layout = compute_grid(PaperSize("A6", 10.5, 14.8), GridParameters(45, 45, 4, 2))
        assert (layout.columns, layout.rows) == (2, 3)
