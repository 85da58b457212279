"""
Core Models Package

| Type | Mutable | Notes |
|------|---------|-------|
| `PaperSize` | no | Fixed catalog `PAPER_SIZES` |
| `GridParameters` | no | Replaced wholesale on each edit |
| `ImageRef` | no | Owned by a single placeholder |
| `Transform` | no | `IDENTITY` for empty placeholders |
| `PlaceholderSlot` | no | Geometry from the grid solver |
| `Placeholder` | yes | Tagged `EmptyState`/`FilledState` |
"""

from .paper import PaperSize, PAPER_SIZES, GridParameters
from .image import ImageRef, Transform, IDENTITY
from .placeholder import (
    PlaceholderSlot,
    Placeholder,
    PlaceholderState,
    EmptyState,
    FilledState,
)

__all__ = [
    "PaperSize",
    "PAPER_SIZES",
    "GridParameters",
    "ImageRef",
    "Transform",
    "IDENTITY",
    "PlaceholderSlot",
    "Placeholder",
    "PlaceholderState",
    "EmptyState",
    "FilledState",
]
