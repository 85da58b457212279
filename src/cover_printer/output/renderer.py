"""
Module: output.renderer

Purpose:
    Export a sheet at print resolution.

    Interactive transforms are stored in screen pixels. Export converts
    them to millimetres first (screen_px_to_mm) and only then into
    print space: PDF points for vector output, PRINT_DPI pixels for
    raster output. Screen and print factors never meet in one
    expression.

Key Functions:
    - render_sheet_to_pdf(): One-page PDF sized to the paper
    - render_sheet_to_image(): Raster page as a PIL image
    - save_sheet_image(): Raster page written to disk

Key Classes:
    - ExportError: Exception for failed exports

Dependencies:
    - reportlab: PDF generation
    - PIL: Raster composition
    - core.units: Unit conversions

Used By:
    - gui.main_window: Export actions
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from cover_printer.core.models import ImageRef, Placeholder
from cover_printer.core.units import (
    PRINT_DPI,
    cm_to_mm,
    mm_to_print_px,
    mm_to_pt,
    screen_px_to_mm,
)
from cover_printer.sheet import SheetController

logger = logging.getLogger(__name__)

# Cut guide styling
OUTLINE_WIDTH_PT = 0.25
OUTLINE_GREY = 0.6


class ExportError(Exception):
    """Error while writing an export file."""
    pass


def render_sheet_to_pdf(
    sheet: SheetController,
    output_path: Path,
    *,
    draw_outlines: bool = False,
) -> None:
    """
    Render a sheet to a single-page PDF.

    Each filled placeholder is clipped to its slot and its image drawn
    with the placeholder's transform. Empty placeholders are left blank
    (outlined when draw_outlines is set).

    Args:
        sheet: Sheet to export
        output_path: Path to write PDF
        draw_outlines: Draw thin grey cut guides around every slot

    Raises:
        ExportError: If the PDF cannot be written

    Example:
        >>> render_sheet_to_pdf(sheet, Path("output/covers.pdf"))
    """
    page_width_pt = mm_to_pt(cm_to_mm(sheet.paper.width_cm))
    page_height_pt = mm_to_pt(cm_to_mm(sheet.paper.height_cm))

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        c = canvas.Canvas(str(output_path), pagesize=(page_width_pt, page_height_pt))
        c.setTitle(f"Cover sheet {sheet.paper.label}")

        for placeholder in sheet.placeholders:
            if placeholder.image is not None:
                _draw_placeholder(c, placeholder, page_height_pt)
            if draw_outlines:
                _draw_outline(c, placeholder, page_height_pt)

        c.showPage()
        c.save()
    except OSError as e:
        raise ExportError(f"Failed to write PDF {output_path}: {e}") from e

    logger.info(
        f"Exported {sheet.filled_count}/{len(sheet.placeholders)} placeholders "
        f"on {sheet.paper.label} to {output_path}"
    )


def _draw_placeholder(
    c: canvas.Canvas,
    placeholder: Placeholder,
    page_height_pt: float,
) -> None:
    """
    Draw one filled placeholder, clipped to its slot.

    Args:
        c: ReportLab canvas
        placeholder: Filled placeholder
        page_height_pt: Page height for Y coordinate transformation
    """
    slot = placeholder.slot
    image = placeholder.image
    transform = placeholder.transform

    slot_x_pt = mm_to_pt(slot.left_mm)
    slot_y_pt = _transform_y(page_height_pt, slot.top_mm, slot.height_mm)

    # Image rectangle in millimetres relative to the paper
    offset_x_mm = screen_px_to_mm(transform.offset_x)
    offset_y_mm = screen_px_to_mm(transform.offset_y)
    image_w_mm = screen_px_to_mm(image.natural_width * transform.scale)
    image_h_mm = screen_px_to_mm(image.natural_height * transform.scale)

    image_x_pt = mm_to_pt(slot.left_mm + offset_x_mm)
    image_y_pt = _transform_y(page_height_pt, slot.top_mm + offset_y_mm, image_h_mm)

    c.saveState()
    clip = c.beginPath()
    clip.rect(slot_x_pt, slot_y_pt, mm_to_pt(slot.width_mm), mm_to_pt(slot.height_mm))
    c.clipPath(clip, stroke=0, fill=0)
    c.drawImage(
        _pil_to_reader(image),
        image_x_pt,
        image_y_pt,
        width=mm_to_pt(image_w_mm),
        height=mm_to_pt(image_h_mm),
        mask="auto",
    )
    c.restoreState()


def _draw_outline(c: canvas.Canvas, placeholder: Placeholder, page_height_pt: float) -> None:
    """Draw a thin cut guide around a slot."""
    slot = placeholder.slot
    c.saveState()
    c.setLineWidth(OUTLINE_WIDTH_PT)
    c.setStrokeGray(OUTLINE_GREY)
    c.rect(
        mm_to_pt(slot.left_mm),
        _transform_y(page_height_pt, slot.top_mm, slot.height_mm),
        mm_to_pt(slot.width_mm),
        mm_to_pt(slot.height_mm),
        stroke=1,
        fill=0,
    )
    c.restoreState()


def render_sheet_to_image(
    sheet: SheetController,
    *,
    dpi: float = PRINT_DPI,
    background: str = "white",
) -> Image.Image:
    """
    Render a sheet to an RGB raster page.

    Only the visible part of each image is resampled, so deep zooms do
    not allocate the full zoomed image.

    Args:
        sheet: Sheet to export
        dpi: Output resolution (default PRINT_DPI)
        background: Page colour

    Returns:
        PIL image of the whole paper at the requested resolution

    Example:
        >>> page = render_sheet_to_image(sheet)
        >>> page.size
        (1181, 1772)  # 10×15 cm at 300 DPI
    """
    page_w = round(mm_to_print_px(cm_to_mm(sheet.paper.width_cm), dpi))
    page_h = round(mm_to_print_px(cm_to_mm(sheet.paper.height_cm), dpi))
    page = Image.new("RGB", (page_w, page_h), background)

    for placeholder in sheet.placeholders:
        if placeholder.image is None:
            continue
        region = _visible_region(sheet, placeholder, dpi)
        if region is None:
            continue
        source_box, dest_box = region
        dest_w = dest_box[2] - dest_box[0]
        dest_h = dest_box[3] - dest_box[1]
        if dest_w <= 0 or dest_h <= 0:
            continue

        handle: Image.Image = placeholder.image.handle
        patch = handle.resize((dest_w, dest_h), Image.Resampling.LANCZOS, box=source_box)
        if patch.mode == "RGBA":
            page.paste(patch, dest_box[:2], patch)
        else:
            page.paste(patch.convert("RGB"), dest_box[:2])

    logger.debug(f"Rasterised {sheet.paper.label} at {dpi:g} DPI: {page_w}x{page_h}")
    return page


def save_sheet_image(
    sheet: SheetController,
    output_path: Path,
    *,
    dpi: float = PRINT_DPI,
) -> None:
    """
    Render a sheet and save it (format from the file extension).

    Raises:
        ExportError: If the image cannot be written
    """
    page = render_sheet_to_image(sheet, dpi=dpi)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        page.save(output_path, dpi=(dpi, dpi))
    except (OSError, ValueError) as e:
        raise ExportError(f"Failed to write image {output_path}: {e}") from e
    logger.info(f"Exported {sheet.paper.label} raster ({page.width}x{page.height}) to {output_path}")


def _visible_region(
    sheet: SheetController,
    placeholder: Placeholder,
    dpi: float,
) -> Optional[Tuple[Tuple[float, float, float, float], Tuple[int, int, int, int]]]:
    """
    Part of the image that shows through its slot.

    Returns:
        (source box in image pixels, destination box in page print
        pixels), or None when nothing is visible
    """
    image: ImageRef = placeholder.image
    transform = placeholder.transform
    if transform.scale <= 0:
        return None
    container_w, container_h = sheet.container_size_px(placeholder.id)

    # Clip the container rectangle against the image, in image pixels
    u0, v0 = transform.image_point(0, 0)
    u1, v1 = transform.image_point(container_w, container_h)
    u0, v0 = max(u0, 0.0), max(v0, 0.0)
    u1, v1 = min(u1, float(image.natural_width)), min(v1, float(image.natural_height))
    if u1 <= u0 or v1 <= v0:
        return None

    # Back to container pixels, then through millimetres into print pixels
    x0, y0 = transform.map_point(u0, v0)
    x1, y1 = transform.map_point(u1, v1)
    slot = placeholder.slot

    def to_page(slot_mm: float, container_px: float) -> int:
        return round(mm_to_print_px(slot_mm + screen_px_to_mm(container_px), dpi))

    dest = (
        to_page(slot.left_mm, x0),
        to_page(slot.top_mm, y0),
        to_page(slot.left_mm, x1),
        to_page(slot.top_mm, y1),
    )
    return (u0, v0, u1, v1), dest


def _pil_to_reader(image: ImageRef) -> ImageReader:
    """
    Convert an ImageRef's PIL handle to a ReportLab ImageReader.

    Args:
        image: Image whose handle is a PIL Image

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    image.handle.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _transform_y(page_height_pt: float, top_mm: float, height_mm: float) -> float:
    """
    Convert a top-down millimetre position to bottom-up PDF Y.

    Args:
        page_height_pt: Page height in points
        top_mm: Distance of the element's top edge from the paper top
        height_mm: Element height

    Returns:
        Y of the element's bottom edge in points from the page bottom
    """
    return page_height_pt - mm_to_pt(top_mm) - mm_to_pt(height_mm)
