"""
Module: layout

Purpose:
    Grid geometry for placeholders on a sheet of paper.

Key Functions:
    - compute_grid(): Paper + parameters -> GridLayout
    - count_fitting(): Items along one axis

Key Classes:
    - GridLayout: Grid plan with row-major slots

Used By:
    - sheet.controller: Placeholder regeneration
"""

from .models import GridLayout
from .grid import compute_grid, count_fitting

__all__ = [
    "GridLayout",
    "compute_grid",
    "count_fitting",
]
