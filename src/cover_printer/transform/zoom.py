"""
Module: transform.zoom

Purpose:
    Cursor-anchored zoom by one fixed step per wheel tick.

Key Functions:
    - zoom_at(): New transform after one zoom step
    - direction_from_wheel_delta(): Map a wheel delta to a direction

Key Classes:
    - ZoomDirection: IN or OUT

Algorithm:
    1. new_scale = old_scale * factor (factor = ZOOM_STEP or 1/ZOOM_STEP)
    2. Without whitespace, new_scale >= minimum cover scale
    3. image_point = (cursor - old_offset) / old_scale
    4. new_offset = cursor - image_point * new_scale  (per axis)
    5. Without whitespace, constrain new_offset with the new scale

    Step 5 may move the anchored point when the clamp engages; with
    whitespace allowed the point under the cursor does not drift.

Dependencies:
    - transform.fit: minimum_cover_scale
    - transform.pan: constrain_offset

Used By:
    - sheet.controller: Wheel events
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from cover_printer.core.models import Transform

from .fit import minimum_cover_scale
from .pan import constrain_offset

ZOOM_STEP = 1.1


class ZoomDirection(Enum):
    IN = "in"
    OUT = "out"

    @property
    def factor(self) -> float:
        """Scale multiplier for one step."""
        return ZOOM_STEP if self is ZoomDirection.IN else 1 / ZOOM_STEP


def direction_from_wheel_delta(delta: float) -> Optional[ZoomDirection]:
    """
    Positive delta (wheel away from the user) zooms in.

    Returns:
        ZoomDirection, or None for a zero delta
    """
    if delta > 0:
        return ZoomDirection.IN
    if delta < 0:
        return ZoomDirection.OUT
    return None


def zoom_at(
    cursor_x: float,
    cursor_y: float,
    transform: Transform,
    direction: ZoomDirection,
    image_w: float,
    image_h: float,
    container_w: float,
    container_h: float,
    allow_whitespace: bool,
) -> Transform:
    """
    Zoom one step keeping the image point under the cursor in place.

    Args:
        cursor_x: Cursor x relative to the container's top-left
        cursor_y: Cursor y relative to the container's top-left
        transform: Current transform
        direction: IN or OUT
        image_w: Image natural width
        image_h: Image natural height
        container_w: Container width in screen pixels
        container_h: Container height in screen pixels
        allow_whitespace: If False, clamp scale and offset so the
            image keeps covering the container

    Returns:
        New transform; the input transform if its scale is not positive
    """
    old_scale = transform.scale
    if old_scale <= 0:
        return transform

    new_scale = old_scale * direction.factor
    if not allow_whitespace:
        new_scale = max(new_scale, minimum_cover_scale(container_w, container_h, image_w, image_h))

    # Anchor before constraining
    image_x = (cursor_x - transform.offset_x) / old_scale
    image_y = (cursor_y - transform.offset_y) / old_scale
    new_offset_x = cursor_x - image_x * new_scale
    new_offset_y = cursor_y - image_y * new_scale

    if not allow_whitespace:
        new_offset_x, new_offset_y = constrain_offset(
            new_offset_x,
            new_offset_y,
            container_w,
            container_h,
            image_w * new_scale,
            image_h * new_scale,
            allow_whitespace,
        )

    return Transform(new_offset_x, new_offset_y, new_scale)
