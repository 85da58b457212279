"""
Tests for transform.pan

Test Coverage:
- Clamp range when the image overflows
- Centering when the image does not overflow
- Pass-through when whitespace is allowed
"""
import pytest

from cover_printer.transform import constrain_axis, constrain_offset


class TestConstrainAxis:
    @pytest.mark.parametrize("candidate, expected", [(10, 0), (-500, -170), (-42.5, -42.5)])
    def test_when_overflowing_then_clamped(self, candidate, expected):
        assert constrain_axis(candidate, 170, 340, allow_whitespace=False) == pytest.approx(expected)

    def test_when_not_overflowing_then_centered(self):
        assert constrain_axis(-30, 170, 100, allow_whitespace=False) == pytest.approx(35)

    def test_when_whitespace_allowed_then_unchanged(self):
        assert constrain_axis(999, 170, 340, allow_whitespace=True) == 999

    @pytest.mark.parametrize("candidate", [-400, -170, -100, -1, 0, 1, 50])
    def test_result_always_covers_container(self, candidate):
        offset = constrain_axis(candidate, 170, 340, allow_whitespace=False)
        assert offset <= 0
        assert offset + 340 >= 170


def test_constrain_offset_applies_per_axis():
    x, y = constrain_offset(5, -500, 170, 170, 170, 340, allow_whitespace=False)
    assert x == pytest.approx(0)
    assert y == pytest.approx(-170)
