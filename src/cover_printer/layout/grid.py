"""
Module: layout.grid

Purpose:
    Compute how many equally sized placeholders fit on a sheet and
    where each one goes. The grid is centered inside the margins.

Key Functions:
    - compute_grid(): Main grid solver
    - count_fitting(): Items of one size that fit along one axis

Algorithm:
    Per axis, in millimetres:
    1. available = paper - 2 * margin
    2. count = floor((available + spacing) / (picture + spacing))
       (n items need only n - 1 gaps, so one extra gap is added to
       the available length before dividing by the pitch)
    3. total = count * picture + (count - 1) * spacing
    4. offset = margin + (available - total) / 2
    5. Slot i sits at offset + index * (picture + spacing), with
       row = i // columns and col = i % columns

    Degenerate input yields an empty grid and a warning, never an
    exception.

Dependencies:
    - core.units: Paper size conversion
    - layout.models: GridLayout

Used By:
    - sheet.controller: Regeneration on parameter change
"""

from __future__ import annotations

import logging
import math
from typing import List

from cover_printer.core.models import GridParameters, PaperSize, PlaceholderSlot
from cover_printer.core.units import cm_to_mm

from .models import GridLayout

logger = logging.getLogger(__name__)


def count_fitting(available_mm: float, item_mm: float, spacing_mm: float) -> int:
    """
    Number of items that fit along one axis.

    Args:
        available_mm: Length inside the margins
        item_mm: Item length
        spacing_mm: Gap between neighbouring items

    Returns:
        Item count, 0 for any degenerate combination

    Example:
        >>> count_fitting(92, 45, 2)
        2
    """
    pitch = item_mm + spacing_mm
    if item_mm <= 0 or spacing_mm < 0 or pitch <= 0:
        return 0
    if available_mm < item_mm:
        return 0
    if not math.isfinite(available_mm) or not math.isfinite(pitch):
        return 0
    return max(0, math.floor((available_mm + spacing_mm) / pitch))


def compute_grid(paper: PaperSize, params: GridParameters) -> GridLayout:
    """
    Lay out placeholders on a sheet.

    Pure and deterministic: equal inputs give equal layouts.

    Args:
        paper: Paper size (centimetres)
        params: Picture size, margin and spacing (millimetres)

    Returns:
        GridLayout with row-major slots; empty when nothing fits

    Example:
        >>> layout = compute_grid(PaperSize("10×15 cm", 10, 15), GridParameters(45, 45, 4, 2))
        >>> (layout.columns, layout.rows, layout.offset_x_mm, layout.offset_y_mm)
        (2, 3, 4.0, 5.5)
    """
    paper_width_mm = cm_to_mm(paper.width_cm)
    paper_height_mm = cm_to_mm(paper.height_cm)
    picture_w = params.picture_width_mm
    picture_h = params.picture_height_mm
    margin = params.margin_mm
    spacing = params.spacing_mm

    available_width = paper_width_mm - 2 * margin
    available_height = paper_height_mm - 2 * margin

    warnings = _validate(paper_width_mm, paper_height_mm, params)
    if warnings:
        for message in warnings:
            logger.warning(f"Empty grid on {paper.label}: {message}")
        return _empty_layout(paper, margin, warnings)

    columns = count_fitting(available_width, picture_w, spacing)
    rows = count_fitting(available_height, picture_h, spacing)

    if columns == 0 or rows == 0:
        message = (
            f"{picture_w}x{picture_h} mm picture does not fit in "
            f"{available_width}x{available_height} mm available area"
        )
        logger.warning(f"Empty grid on {paper.label}: {message}")
        return _empty_layout(paper, margin, (message,))

    total_width = columns * picture_w + (columns - 1) * spacing
    total_height = rows * picture_h + (rows - 1) * spacing

    offset_x = margin + (available_width - total_width) / 2
    offset_y = margin + (available_height - total_height) / 2

    slots: List[PlaceholderSlot] = []
    for index in range(rows * columns):
        row = index // columns
        col = index % columns
        slots.append(PlaceholderSlot(
            id=index,
            left_mm=offset_x + col * (picture_w + spacing),
            top_mm=offset_y + row * (picture_h + spacing),
            width_mm=picture_w,
            height_mm=picture_h,
        ))

    logger.debug(
        f"Grid on {paper.label}: {rows}x{columns}, "
        f"offset=({offset_x:.2f}, {offset_y:.2f}) mm"
    )

    return GridLayout(
        paper=paper,
        rows=rows,
        columns=columns,
        offset_x_mm=offset_x,
        offset_y_mm=offset_y,
        total_width_mm=total_width,
        total_height_mm=total_height,
        slots=tuple(slots),
    )


def _validate(
    paper_width_mm: float,
    paper_height_mm: float,
    params: GridParameters,
) -> tuple[str, ...]:
    """Collect reasons why no grid can be produced."""
    problems = []
    if params.picture_width_mm <= 0 or params.picture_height_mm <= 0:
        problems.append(
            f"picture size must be positive: "
            f"{params.picture_width_mm}x{params.picture_height_mm} mm"
        )
    if params.margin_mm < 0:
        problems.append(f"margin must be non-negative: {params.margin_mm} mm")
    if params.spacing_mm < 0:
        problems.append(f"spacing must be non-negative: {params.spacing_mm} mm")
    if 2 * params.margin_mm >= min(paper_width_mm, paper_height_mm):
        problems.append(f"margins of {params.margin_mm} mm leave no room on the paper")
    return tuple(problems)


def _empty_layout(paper: PaperSize, margin: float, warnings: tuple[str, ...]) -> GridLayout:
    """Degenerate layout with no slots."""
    return GridLayout(
        paper=paper,
        rows=0,
        columns=0,
        offset_x_mm=max(margin, 0.0),
        offset_y_mm=max(margin, 0.0),
        total_width_mm=0.0,
        total_height_mm=0.0,
        slots=(),
        warnings=warnings,
    )
