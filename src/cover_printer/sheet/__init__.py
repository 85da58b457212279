"""
Module: sheet

Purpose:
    Sheet controller: owns the placeholder collection and routes
    parameter, pointer and wheel events through the core.

Key Classes:
    - SheetController: Main controller
    - SheetConfig / ReconcilePolicy: Regeneration behaviour
    - PointerSubscription: Scoped global pointer events
    - SheetError: Unknown placeholder

Used By:
    - gui: Canvas and main window
    - output: Export
"""

from .config import ReconcilePolicy, SheetConfig
from .controller import SheetController, SheetError
from .subscription import PointerSubscription

__all__ = [
    "ReconcilePolicy",
    "SheetConfig",
    "SheetController",
    "SheetError",
    "PointerSubscription",
]
