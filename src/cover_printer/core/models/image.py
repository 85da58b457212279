"""
Module: image

Purpose:
    Image reference and the 2-D transform applied to it inside a
    placeholder.

Key Classes:
    - ImageRef: Decoded image handle with natural pixel size
    - Transform: Top-left-origin offset + uniform scale

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.placeholder: Filled state
    - transform: Fit, pan and zoom results
    - images.loader: Produces ImageRefs
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class ImageRef:
    """
    Decoded image owned by exactly one placeholder (immutable).

    The handle is opaque to the core; the GUI and exporters know it is
    a PIL image. Equality ignores the handle.

    Attributes:
        handle: Displayable image object
        natural_width: Width in image pixels
        natural_height: Height in image pixels
        source: Optional origin (file path) for logging

    Invariants:
        - natural_width > 0
        - natural_height > 0
    """

    handle: Any = field(compare=False, repr=False)
    natural_width: int
    natural_height: int
    source: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate natural size on construction."""
        if self.natural_width <= 0:
            raise ValueError(f"natural_width must be positive: {self.natural_width}")
        if self.natural_height <= 0:
            raise ValueError(f"natural_height must be positive: {self.natural_height}")

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) in image pixels."""
        return (self.natural_width, self.natural_height)


@dataclass(frozen=True, slots=True)
class Transform:
    """
    Affine placement of an image inside its container (immutable).

    The image is scaled about its top-left corner and then translated,
    so a point (u, v) in image pixels maps to
    (offset_x + u * scale, offset_y + v * scale) in container pixels.

    Attributes:
        offset_x: Horizontal translation in screen pixels
        offset_y: Vertical translation in screen pixels
        scale: Uniform scale factor (screen px per image px)

    Example:
        >>> Transform(0, -85, 1.7).map_point(100, 200)
        (170.0, 255.0)
    """

    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = 1.0

    def map_point(self, u: float, v: float) -> tuple[float, float]:
        """Map an image-space point to container space."""
        return (self.offset_x + u * self.scale, self.offset_y + v * self.scale)

    def image_point(self, x: float, y: float) -> tuple[float, float]:
        """Map a container-space point back to image space."""
        return ((x - self.offset_x) / self.scale, (y - self.offset_y) / self.scale)

    def scaled_size(self, image: ImageRef) -> tuple[float, float]:
        """Size of the image in container pixels under this transform."""
        return (image.natural_width * self.scale, image.natural_height * self.scale)


IDENTITY = Transform(0.0, 0.0, 1.0)
