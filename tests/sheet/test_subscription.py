"""
Tests for sheet.subscription

Test Coverage:
- Acquire attaches, release detaches exactly once
- Events after release are ignored
- Context manager releases on exit, ending any drag
"""
from unittest.mock import MagicMock

import pytest

from cover_printer.core.models import PAPER_SIZES, GridParameters
from cover_printer.sheet import PointerSubscription, SheetController
from cover_printer.transform import DragState


@pytest.fixture
def dragging_sheet(make_image_ref):
    sheet = SheetController(PAPER_SIZES[0], GridParameters(45, 45, 4, 2))
    sheet.assign_image(0, make_image_ref(100, 200))
    x, y, w, h = sheet.slot_rect_px(0)
    sheet.pointer_down(x + w / 2, y + h / 2)
    return sheet


class TestPointerSubscription:
    def test_acquire_attaches_and_release_detaches_once(self, dragging_sheet):
        # Arrange
        detach = MagicMock()
        attach = MagicMock(return_value=detach)

        # Act
        sub = PointerSubscription.acquire(dragging_sheet, attach)
        sub.release()
        sub.release()

        # Assert
        attach.assert_called_once_with(sub)
        detach.assert_called_once_with()
        assert sub.released

    def test_dispatch_routes_to_controller(self, dragging_sheet):
        sub = PointerSubscription.acquire(dragging_sheet, lambda s: (lambda: None))
        x, y, w, h = dragging_sheet.slot_rect_px(0)

        assert sub.dispatch_move(x + w / 2, y + h / 2 - 10) is True
        assert sub.dispatch_up() is True
        assert dragging_sheet.drag.state is DragState.IDLE

    def test_when_released_then_events_ignored(self, dragging_sheet):
        sub = PointerSubscription.acquire(dragging_sheet, lambda s: (lambda: None))
        sub.release()

        assert sub.dispatch_move(0, 0) is False
        assert sub.dispatch_up() is False

    def test_context_manager_releases_and_ends_drag(self, dragging_sheet):
        detach = MagicMock()

        with PointerSubscription.acquire(dragging_sheet, lambda s: detach) as sub:
            assert not sub.released

        assert sub.released
        detach.assert_called_once_with()
        assert dragging_sheet.drag.state is DragState.IDLE
