"""
Module: transform.drag

Purpose:
    Single-slot state machine for a pointer-drag pan.

States:
    IDLE -> DRAGGING(target)   begin() on an image-bearing placeholder
    DRAGGING -> DRAGGING       candidate_offset() on every pointer move
    DRAGGING -> IDLE           end() on pointer-up, wherever it happens

    A begin() while dragging is ignored; there is only one slot.

Key Classes:
    - DragState: IDLE or DRAGGING
    - DragSession: The slot

Used By:
    - sheet.controller: Pointer down/move/up routing
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True, slots=True)
class _ActiveDrag:
    target_id: int
    start_cursor: Point
    start_offset: Point


class DragSession:
    """
    Pointer-drag pan coordinator.

    The session only produces candidate offsets; constraining and
    writing them into the placeholder is the caller's job.

    Example:
        >>> drag = DragSession()
        >>> drag.begin(3, (10, 10), (0, -85))
        True
        >>> drag.candidate_offset((15, 0))
        (5, -95)
        >>> drag.end()
        3
    """

    def __init__(self) -> None:
        self._active: Optional[_ActiveDrag] = None

    @property
    def state(self) -> DragState:
        return DragState.DRAGGING if self._active is not None else DragState.IDLE

    @property
    def active(self) -> bool:
        return self._active is not None

    @property
    def target_id(self) -> Optional[int]:
        """Placeholder being dragged, or None when idle."""
        return self._active.target_id if self._active is not None else None

    @property
    def start_cursor(self) -> Optional[Point]:
        return self._active.start_cursor if self._active is not None else None

    @property
    def start_offset(self) -> Optional[Point]:
        return self._active.start_offset if self._active is not None else None

    def begin(self, target_id: int, cursor: Point, start_offset: Point) -> bool:
        """
        Start dragging a placeholder.

        Args:
            target_id: Placeholder id under the pointer
            cursor: Pointer position at press
            start_offset: Placeholder's (offset_x, offset_y) at press

        Returns:
            True if the session started, False if one is already active
        """
        if self._active is not None:
            logger.debug(
                f"Ignoring drag start on {target_id}: "
                f"placeholder {self._active.target_id} is being dragged"
            )
            return False
        self._active = _ActiveDrag(target_id, tuple(cursor), tuple(start_offset))
        logger.debug(f"Drag started on placeholder {target_id}")
        return True

    def candidate_offset(self, cursor: Point) -> Optional[Point]:
        """
        Unconstrained offset for the current pointer position.

        Returns:
            start_offset + (cursor - start_cursor), or None when idle
        """
        if self._active is None:
            return None
        start_x, start_y = self._active.start_cursor
        offset_x, offset_y = self._active.start_offset
        return (offset_x + cursor[0] - start_x, offset_y + cursor[1] - start_y)

    def end(self) -> Optional[int]:
        """
        Finish the drag.

        Returns:
            The released target id, or None if no drag was active
        """
        if self._active is None:
            return None
        target_id = self._active.target_id
        self._active = None
        logger.debug(f"Drag ended on placeholder {target_id}")
        return target_id
