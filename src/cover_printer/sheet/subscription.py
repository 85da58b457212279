"""
Module: sheet.subscription

Purpose:
    Scoped subscription to process-wide pointer-move/up events.

    A drag must keep following the pointer after it leaves the
    placeholder, so move/up events are taken from a global source (the
    Qt application's event filter in the GUI). The subscription is
    acquired once when the drawing surface is created and released when
    it is torn down. Releasing is idempotent, and the object is also a
    context manager so every exit path releases it.

Key Classes:
    - PointerSubscription: Routes global pointer events to a controller

Used By:
    - gui.widgets.sheet_canvas: Global pointer filter
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .controller import SheetController

logger = logging.getLogger(__name__)

Detach = Callable[[], None]


class PointerSubscription:
    """
    Live link between a global pointer source and a SheetController.

    Example:
        >>> with PointerSubscription.acquire(controller, source.install) as sub:
        ...     sub.dispatch_move(120, 80)
    """

    def __init__(self, controller: SheetController) -> None:
        self._controller: Optional[SheetController] = controller
        self._detach: Optional[Detach] = None

    @classmethod
    def acquire(
        cls,
        controller: SheetController,
        attach: Callable[[PointerSubscription], Detach],
    ) -> PointerSubscription:
        """
        Create a subscription and attach it to a pointer source.

        Args:
            controller: Receiver of move/up events
            attach: Installs the subscription on the event source and
                returns the callable that uninstalls it

        Returns:
            The attached subscription
        """
        subscription = cls(controller)
        subscription._detach = attach(subscription)
        logger.debug("Global pointer subscription acquired")
        return subscription

    @property
    def released(self) -> bool:
        return self._controller is None

    def dispatch_move(self, x: float, y: float) -> bool:
        """Forward a pointer move. Returns True if a placeholder changed."""
        if self._controller is None:
            return False
        return self._controller.pointer_move(x, y)

    def dispatch_up(self) -> bool:
        """Forward a pointer release. Returns True if a drag ended."""
        if self._controller is None:
            return False
        return self._controller.pointer_up()

    def release(self) -> None:
        """Detach from the pointer source. Safe to call repeatedly."""
        if self._controller is None:
            return
        controller = self._controller
        self._controller = None
        # A drag cannot outlive its event source
        controller.pointer_up()
        detach, self._detach = self._detach, None
        if detach is not None:
            detach()
        logger.debug("Global pointer subscription released")

    def __enter__(self) -> PointerSubscription:
        return self

    def __exit__(self, *args) -> None:
        self.release()
