"""
Core Package

Immutable value types and unit conversions shared by the layout solver,
the transform engine and the sheet controller.

All values are frozen dataclasses except `Placeholder`, which is the one
mutable record per grid slot. Its state is a tagged variant so transform
fields cannot exist without an image.
"""

from .models import (
    PaperSize,
    PAPER_SIZES,
    GridParameters,
    ImageRef,
    Transform,
    IDENTITY,
    PlaceholderSlot,
    Placeholder,
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
    "EmptyState",
    "FilledState",
]
