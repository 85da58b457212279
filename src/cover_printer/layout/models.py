"""
Module: layout.models

Purpose:
    Result type of the grid solver.

Key Classes:
    - GridLayout: Rows, columns, centering offset and slots

Dependencies:
    - dataclasses (std)
    - core.models: PaperSize, PlaceholderSlot

Used By:
    - layout.grid: Creates GridLayouts
    - sheet.controller: Regenerates placeholders from slots
"""

from __future__ import annotations

from dataclasses import dataclass, field

from cover_printer.core.models import PaperSize, PlaceholderSlot


@dataclass(frozen=True)
class GridLayout:
    """
    Complete grid plan for one sheet (immutable).

    All lengths are millimetres measured from the paper's top-left
    corner.

    Attributes:
        paper: Paper the grid was computed for
        rows: Number of placeholder rows
        columns: Number of placeholder columns
        offset_x_mm: Left edge of the first column
        offset_y_mm: Top edge of the first row
        total_width_mm: Grid width without trailing spacing
        total_height_mm: Grid height without trailing spacing
        slots: Placeholder slots in row-major order
        warnings: Why the grid degraded, if it did

    Example:
        >>> layout = compute_grid(PAPER_SIZES[0], GridParameters())
        >>> (layout.rows, layout.columns)
        (3, 2)
    """

    paper: PaperSize
    rows: int
    columns: int
    offset_x_mm: float
    offset_y_mm: float
    total_width_mm: float
    total_height_mm: float
    slots: tuple[PlaceholderSlot, ...]
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def placeholder_count(self) -> int:
        """Number of placeholders (rows * columns)."""
        return len(self.slots)

    @property
    def is_empty(self) -> bool:
        """Check if no placeholder fits."""
        return len(self.slots) == 0

    def slot(self, placeholder_id: int) -> PlaceholderSlot:
        """
        Get the slot for a placeholder id.

        Raises:
            IndexError: If id is outside the grid
        """
        if not 0 <= placeholder_id < len(self.slots):
            raise IndexError(f"No placeholder {placeholder_id} in {self.rows}x{self.columns} grid")
        return self.slots[placeholder_id]
