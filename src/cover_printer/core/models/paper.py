"""
Module: paper

Purpose:
    Paper catalog and the user-editable grid parameters.

Key Classes:
    - PaperSize: One catalog entry (centimetres)
    - GridParameters: Picture size, margin, spacing (millimetres) and
      the whitespace policy

Key Constants:
    - PAPER_SIZES: The fixed paper catalog

Dependencies:
    - dataclasses (std)

Used By:
    - layout.grid: Grid computation
    - sheet.controller: Regeneration on change
    - gui.widgets.parameter_panel: Parameter source
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PaperSize:
    """
    Physical paper size (immutable).

    Attributes:
        label: Display label like "10×15 cm"
        width_cm: Paper width in centimetres
        height_cm: Paper height in centimetres

    Invariants:
        - width_cm > 0
        - height_cm > 0
    """

    label: str
    width_cm: float
    height_cm: float

    def __post_init__(self) -> None:
        """Validate dimensions on construction."""
        if self.width_cm <= 0:
            raise ValueError(f"width_cm must be positive: {self.width_cm}")
        if self.height_cm <= 0:
            raise ValueError(f"height_cm must be positive: {self.height_cm}")


PAPER_SIZES: tuple[PaperSize, ...] = (
    PaperSize("10×15 cm", 10, 15),
    PaperSize("13×18 cm", 13, 18),
)


@dataclass(frozen=True, slots=True)
class GridParameters:
    """
    User-editable grid parameters (immutable value, replaced on edit).

    Not validated on construction: zero or negative values are a
    legitimate input that the grid solver degrades to an empty grid.

    Attributes:
        picture_width_mm: Placeholder width
        picture_height_mm: Placeholder height
        margin_mm: Margin on every paper edge
        spacing_mm: Gap between neighbouring placeholders
        allow_whitespace: If False, images must always cover their
            placeholder (cover fit, clamped pan, minimum zoom)

    Example:
        >>> params = GridParameters()
        >>> params.picture_width_mm
        45.0
    """

    picture_width_mm: float = 45.0
    picture_height_mm: float = 45.0
    margin_mm: float = 4.0
    spacing_mm: float = 2.0
    allow_whitespace: bool = False
