"""
Module: transform.pan

Purpose:
    Clamp an image offset so no whitespace shows when whitespace is
    disallowed.

    With a top-left-origin transform the image's leading edge sits at
    the offset, so the image covers a container axis exactly when
    offset <= 0 and offset + scaled_size >= container_size, i.e. the
    offset lies in [container_size - scaled_size, 0].

Key Functions:
    - constrain_axis(): One axis
    - constrain_offset(): Both axes

Used By:
    - transform.zoom: Post-step after anchoring
    - sheet.controller: Drag pan and re-constraining on change
"""

from __future__ import annotations


def constrain_axis(
    candidate: float,
    container_size: float,
    scaled_size: float,
    allow_whitespace: bool,
) -> float:
    """
    Constrain an offset along one axis.

    Args:
        candidate: Proposed offset in screen pixels
        container_size: Container length on this axis
        scaled_size: Image length on this axis after scaling
        allow_whitespace: If True, any offset is accepted

    Returns:
        The candidate when whitespace is allowed; the centered offset
        when the image does not overflow the container; otherwise the
        candidate clamped to [container_size - scaled_size, 0]

    Example:
        >>> constrain_axis(10, 170, 340, allow_whitespace=False)
        0
        >>> constrain_axis(-500, 170, 340, allow_whitespace=False)
        -170
    """
    if allow_whitespace:
        return candidate
    if scaled_size <= container_size:
        # Panning disabled on this axis
        return (container_size - scaled_size) / 2
    lower = container_size - scaled_size
    return min(max(candidate, lower), 0)


def constrain_offset(
    offset_x: float,
    offset_y: float,
    container_w: float,
    container_h: float,
    scaled_w: float,
    scaled_h: float,
    allow_whitespace: bool,
) -> tuple[float, float]:
    """Apply constrain_axis() to both axes."""
    return (
        constrain_axis(offset_x, container_w, scaled_w, allow_whitespace),
        constrain_axis(offset_y, container_h, scaled_h, allow_whitespace),
    )
