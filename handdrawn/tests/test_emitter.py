"""Tests for point-list to path emission."""

from __future__ import annotations

from handdrawn.perturb.emitter import emit
from handdrawn.shapes import ClosePath, LineTo, MoveTo


class TestEmit:
    def test_open(self) -> None:
        result = emit([(0, 0), (1, 1), (2, 0)], {}, closed=False)
        assert result.commands == (MoveTo(0, 0), LineTo(1, 1), LineTo(2, 0))
        assert not result.closed

    def test_closed(self) -> None:
        result = emit([(0, 0), (1, 1), (2, 0)], {}, closed=True)
        assert result.commands[-1] == ClosePath()
        assert result.d == "M 0 0 L 1 1 L 2 0 Z"

    def test_single_move_at_start(self) -> None:
        result = emit([(float(i), 0.0) for i in range(10)], {}, closed=False)
        moves = [c for c in result.commands if isinstance(c, MoveTo)]
        assert moves == [result.commands[0]]

    def test_open_needs_two_points(self) -> None:
        assert emit([(0, 0)], {}, closed=False).is_empty
        assert emit([], {}, closed=False).is_empty

    def test_closed_needs_three_points(self) -> None:
        assert emit([(0, 0), (1, 1)], {}, closed=True).is_empty

    def test_closedness_not_inferred_from_points(self) -> None:
        ring = [(0, 0), (1, 0), (1, 1), (0, 0)]
        assert ClosePath() not in emit(ring, {}, closed=False).commands

    def test_attrs_forwarded(self) -> None:
        attrs = {"stroke": "black", "stroke-width": 2}
        assert emit([(0, 0), (1, 1)], attrs, closed=False).attrs is attrs
        assert emit([(0, 0)], attrs, closed=False).attrs is attrs
