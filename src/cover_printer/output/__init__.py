"""
Module: output

Purpose:
    Print/export path: PDF (reportlab) and raster (PIL) at print
    resolution, kept apart from the interactive screen unit space.

Key Functions:
    - render_sheet_to_pdf(), render_sheet_to_image(), save_sheet_image()

Key Classes:
    - ExportError

Used By:
    - gui.main_window: Export menu
"""

from .renderer import (
    ExportError,
    render_sheet_to_image,
    render_sheet_to_pdf,
    save_sheet_image,
)

__all__ = [
    "ExportError",
    "render_sheet_to_image",
    "render_sheet_to_pdf",
    "save_sheet_image",
]
