"""
Tests for core.units

Test Coverage:
- Centimetre/millimetre conversion
- Screen pixel round trip at 96 DPI
- Print pixels and PDF points
"""
import pytest

from cover_printer.core.units import (
    PRINT_DPI,
    SCREEN_DPI,
    cm_to_mm,
    mm_to_print_px,
    mm_to_pt,
    mm_to_screen_px,
    screen_px_to_mm,
)


def test_cm_to_mm():
    assert cm_to_mm(10) == 100
    assert cm_to_mm(13.5) == 135


def test_one_inch_is_screen_dpi_pixels():
    """25.4 mm is one inch, i.e. SCREEN_DPI pixels."""
    assert mm_to_screen_px(25.4) == pytest.approx(SCREEN_DPI)


def test_screen_px_round_trip():
    assert screen_px_to_mm(mm_to_screen_px(45.0)) == pytest.approx(45.0)


def test_print_pixels_default_to_print_dpi():
    assert mm_to_print_px(25.4) == pytest.approx(PRINT_DPI)
    assert mm_to_print_px(25.4, dpi=150) == pytest.approx(150)


def test_paper_width_in_points():
    """10 cm is 283.46 pt."""
    assert mm_to_pt(100) == pytest.approx(283.4646, rel=1e-4)
