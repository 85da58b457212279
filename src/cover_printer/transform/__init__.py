"""
Module: transform

Purpose:
    Per-placeholder image transform engine: fit, constrained pan,
    cursor-anchored zoom and the drag session. Everything except
    DragSession is a pure function over screen-pixel geometry.

Key Functions:
    - fit_image(), fit_mode_for(), minimum_cover_scale()
    - constrain_axis(), constrain_offset()
    - zoom_at(), direction_from_wheel_delta()

Key Classes:
    - FitMode, ZoomDirection, DragState, DragSession

Used By:
    - sheet.controller
"""

from .fit import FitMode, fit_image, fit_mode_for, minimum_cover_scale
from .pan import constrain_axis, constrain_offset
from .zoom import ZOOM_STEP, ZoomDirection, zoom_at, direction_from_wheel_delta
from .drag import DragSession, DragState

__all__ = [
    # Fit
    "FitMode",
    "fit_image",
    "fit_mode_for",
    "minimum_cover_scale",
    # Pan
    "constrain_axis",
    "constrain_offset",
    # Zoom
    "ZOOM_STEP",
    "ZoomDirection",
    "zoom_at",
    "direction_from_wheel_delta",
    # Drag
    "DragSession",
    "DragState",
]
