"""
Tests for output.renderer

Test Coverage:
- PDF export: one page sized to the paper
- Raster export at print resolution
- Only the visible part of each image reaches the page
"""
import re

import pytest
from PIL import Image

from cover_printer.core.models import PAPER_SIZES, GridParameters
from cover_printer.core.units import mm_to_print_px
from cover_printer.output import ExportError, render_sheet_to_image, render_sheet_to_pdf, save_sheet_image
from cover_printer.sheet import SheetController


@pytest.fixture
def sheet(make_image_ref):
    sheet = SheetController(PAPER_SIZES[0], GridParameters(45, 45, 4, 2))
    sheet.assign_image(0, make_image_ref(100, 200, color="red"))
    return sheet


class TestRenderPdf:
    def test_writes_single_page_sized_to_paper(self, sheet, tmp_path):
        # Arrange
        output = tmp_path / "out" / "covers.pdf"

        # Act
        render_sheet_to_pdf(sheet, output, draw_outlines=True)

        # Assert
        data = output.read_bytes()
        assert data.startswith(b"%PDF")
        assert b"/Count 1" in data
        media_box = re.search(rb"/MediaBox \[\s*0 0 ([\d.]+) ([\d.]+)", data)
        assert media_box is not None
        # 10 x 15 cm = 283.46 x 425.2 pt
        assert float(media_box.group(1)) == pytest.approx(283.46, abs=0.01)
        assert float(media_box.group(2)) == pytest.approx(425.20, abs=0.01)

    def test_unwritable_path_raises_export_error(self, sheet, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(ExportError):
            render_sheet_to_pdf(sheet, blocker / "covers.pdf")


class TestRenderImage:
    def test_page_size_at_300_dpi(self, sheet):
        page = render_sheet_to_image(sheet)
        assert page.size == (1181, 1772)

    def test_filled_placeholder_painted_and_margins_blank(self, sheet):
        page = render_sheet_to_image(sheet).convert("RGB")
        slot = sheet.placeholder(0).slot
        center = (
            int(mm_to_print_px(slot.left_mm + slot.width_mm / 2)),
            int(mm_to_print_px(slot.top_mm + slot.height_mm / 2)),
        )

        assert page.getpixel(center) == (255, 0, 0)
        assert page.getpixel((2, 2)) == (255, 255, 255)

    def test_cropped_part_does_not_bleed_outside_slot(self, sheet):
        """Cover fit crops the tall image vertically; the gap below stays blank."""
        page = render_sheet_to_image(sheet).convert("RGB")
        slot = sheet.placeholder(0).slot
        x = int(mm_to_print_px(slot.left_mm + slot.width_mm / 2))
        y = int(mm_to_print_px(slot.bottom_mm + 1))  # inside the 2 mm spacing

        assert page.getpixel((x, y)) == (255, 255, 255)

    def test_empty_sheet_is_blank(self):
        page = render_sheet_to_image(SheetController()).convert("RGB")
        assert page.getextrema() == ((255, 255), (255, 255), (255, 255))

    def test_save_sheet_image(self, sheet, tmp_path):
        output = tmp_path / "covers.png"
        save_sheet_image(sheet, output, dpi=150)

        with Image.open(output) as saved:
            assert saved.size == (591, 886)
