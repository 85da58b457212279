"""
Tests for transform.drag

Test Coverage:
- IDLE -> DRAGGING -> IDLE transitions
- Single slot: a second begin is ignored
- Candidate offsets follow the cursor delta
"""
from cover_printer.transform import DragSession, DragState


class TestDragSession:
    def test_starts_idle(self):
        drag = DragSession()
        assert drag.state is DragState.IDLE
        assert drag.target_id is None
        assert drag.candidate_offset((10, 10)) is None

    def test_begin_move_end(self):
        # Arrange
        drag = DragSession()

        # Act
        started = drag.begin(3, (10, 10), (0, -85))
        candidate = drag.candidate_offset((15, 0))
        released = drag.end()

        # Assert
        assert started is True
        assert candidate == (5, -95)
        assert released == 3
        assert drag.state is DragState.IDLE

    def test_when_dragging_then_second_begin_is_ignored(self):
        drag = DragSession()
        drag.begin(1, (0, 0), (0, 0))

        assert drag.begin(2, (5, 5), (1, 1)) is False
        assert drag.target_id == 1
        assert drag.start_cursor == (0, 0)

    def test_end_when_idle_returns_none(self):
        assert DragSession().end() is None
