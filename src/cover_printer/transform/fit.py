"""
Module: transform.fit

Purpose:
    Initial placement of an image in its placeholder.

Key Functions:
    - fit_image(): Scale + centering offset for a fit mode
    - fit_mode_for(): Fit mode implied by the whitespace policy
    - minimum_cover_scale(): Smallest scale that covers the container

Key Classes:
    - FitMode: CONTAIN or COVER

Dependencies:
    - core.models: Transform

Used By:
    - sheet.controller: Image assignment and re-fitting
    - transform.zoom: Minimum scale when whitespace is disallowed
"""

from __future__ import annotations

from enum import Enum

from cover_printer.core.models import IDENTITY, Transform


class FitMode(Enum):
    """How an image is initially scaled into its container."""

    CONTAIN = "contain"  # Whole image visible, may leave whitespace
    COVER = "cover"  # Whole container covered, may crop the image


def fit_mode_for(allow_whitespace: bool) -> FitMode:
    """Whitespace allowed -> CONTAIN, otherwise COVER."""
    return FitMode.CONTAIN if allow_whitespace else FitMode.COVER


def minimum_cover_scale(
    container_w: float,
    container_h: float,
    image_w: float,
    image_h: float,
) -> float:
    """
    Smallest scale at which the image covers the container on both axes.

    Returns:
        max(container_w / image_w, container_h / image_h), or 0.0 when
        the image size is not positive
    """
    if image_w <= 0 or image_h <= 0:
        return 0.0
    return max(container_w / image_w, container_h / image_h)


def fit_image(
    container_w: float,
    container_h: float,
    image_w: float,
    image_h: float,
    mode: FitMode,
) -> Transform:
    """
    Fit an image into a container and center it.

    The transform scales about the image's top-left corner, so the
    offset has to re-center explicitly. Offsets are negative on the
    axis a cover fit crops.

    Args:
        container_w: Container width in screen pixels
        container_h: Container height in screen pixels
        image_w: Image natural width in pixels
        image_h: Image natural height in pixels
        mode: CONTAIN or COVER

    Returns:
        Transform placing the image; IDENTITY for non-positive sizes

    Example:
        >>> fit_image(170, 170, 100, 200, FitMode.COVER)
        Transform(offset_x=0.0, offset_y=-85.0, scale=1.7)
    """
    if container_w <= 0 or container_h <= 0 or image_w <= 0 or image_h <= 0:
        return IDENTITY

    scale_x = container_w / image_w
    scale_y = container_h / image_h

    if mode is FitMode.COVER:
        scale = max(scale_x, scale_y)
    else:
        scale = min(scale_x, scale_y)

    offset_x = (container_w - image_w * scale) / 2
    offset_y = (container_h - image_h * scale) / 2
    return Transform(offset_x, offset_y, scale)
