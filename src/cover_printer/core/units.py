"""
Module: core.units

Purpose:
    Physical-to-device unit conversions. Two device spaces exist and
    are kept strictly apart:

    - Screen space: CSS-style pixels at SCREEN_DPI. All interactive
      geometry (container sizes, cursor positions, offsets, scales)
      lives here.
    - Print space: pixels at PRINT_DPI for raster export, and PDF
      points (1/72 inch) for vector export.

    A computation converts from screen pixels back to millimetres
    before entering print space; it never multiplies a screen value
    by a print factor directly.

Key Functions:
    - cm_to_mm(): Paper catalog sizes to millimetres
    - mm_to_screen_px() / screen_px_to_mm(): Interactive space
    - mm_to_print_px(): Raster export space
    - mm_to_pt(): PDF export space

Dependencies:
    - None

Used By:
    - layout.grid: Paper size conversion
    - sheet.controller: Container sizes and hit testing
    - output.renderer: Export geometry
"""

from __future__ import annotations

MM_PER_CM = 10.0
MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0

# Canonical on-screen resolution (one CSS pixel)
SCREEN_DPI = 96.0

# Print resolution for raster export
PRINT_DPI = 300.0


def cm_to_mm(value_cm: float) -> float:
    """Convert centimetres to millimetres."""
    return value_cm * MM_PER_CM


def mm_to_screen_px(value_mm: float) -> float:
    """
    Convert millimetres to screen pixels at SCREEN_DPI.

    Example:
        >>> round(mm_to_screen_px(45), 2)
        170.08
    """
    return value_mm / MM_PER_INCH * SCREEN_DPI


def screen_px_to_mm(value_px: float) -> float:
    """Convert screen pixels at SCREEN_DPI back to millimetres."""
    return value_px / SCREEN_DPI * MM_PER_INCH


def mm_to_print_px(value_mm: float, dpi: float = PRINT_DPI) -> float:
    """
    Convert millimetres to print pixels.

    Args:
        value_mm: Length in millimetres
        dpi: Print resolution (default PRINT_DPI)

    Returns:
        Length in print pixels (unrounded)
    """
    return value_mm / MM_PER_INCH * dpi


def mm_to_pt(value_mm: float) -> float:
    """Convert millimetres to PDF points (1/72 inch)."""
    return value_mm / MM_PER_INCH * POINTS_PER_INCH
