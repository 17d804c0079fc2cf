"""Tests for shape descriptors, path commands and path-data parsing."""

from __future__ import annotations

import dataclasses

import pytest

from handdrawn.shapes import (
    Circle,
    ClosePath,
    Ellipse,
    Line,
    LineTo,
    MoveTo,
    Path,
    PathDataError,
    PathResult,
    Polygon,
    Polyline,
    Rect,
    Unsupported,
    format_number,
    format_path_data,
    parse_path_data,
)


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


class TestDescriptors:
    def test_closed_flags(self) -> None:
        assert not Line(0, 0, 1, 1).closed
        assert not Polyline([(0, 0), (1, 1)]).closed
        assert Polygon([(0, 0), (1, 0), (0, 1)]).closed
        assert Rect(0, 0, 1, 1).closed
        assert Circle(0, 0, 1).closed
        assert Ellipse(0, 0, 2, 1).closed
        assert Path.from_d("M 0 0 L 1 1 Z").closed
        assert not Path.from_d("M 0 0 L 1 1").closed

    def test_points_normalised_to_tuples(self) -> None:
        poly = Polyline([[0, 0], [3, 4]])
        assert poly.points == ((0, 0), (3, 4))

    def test_immutable(self) -> None:
        line = Line(0, 0, 1, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            line.x1 = 5  # type: ignore[misc]

    def test_rect_to_polygon(self) -> None:
        attrs = {"stroke": "red"}
        poly = Rect(10, 20, 30, 40, attrs=attrs).to_polygon()
        assert poly.points == ((10, 20), (40, 20), (40, 60), (10, 60))
        assert poly.attrs is attrs

    def test_path_from_d_keeps_attrs(self) -> None:
        path = Path.from_d("M 0 0 L 5 5", stroke="black", fill="none")
        assert path.attrs == {"stroke": "black", "fill": "none"}
        assert path.commands == (MoveTo(0, 0), LineTo(5, 5))


# ---------------------------------------------------------------------------
# Path-data parsing
# ---------------------------------------------------------------------------


class TestParsePathData:
    def test_absolute(self) -> None:
        cmds = parse_path_data("M 0 0 L 10 0 L 10 10 Z")
        assert cmds == (MoveTo(0, 0), LineTo(10, 0), LineTo(10, 10), ClosePath())

    def test_relative(self) -> None:
        cmds = parse_path_data("m 5 5 l 10 0 l 0 10 z")
        assert cmds == (MoveTo(5, 5), LineTo(15, 5), LineTo(15, 15), ClosePath())

    def test_implicit_lineto_after_move(self) -> None:
        cmds = parse_path_data("M0,0 10,0 10,10")
        assert cmds == (MoveTo(0, 0), LineTo(10, 0), LineTo(10, 10))

    def test_compact_numbers(self) -> None:
        cmds = parse_path_data("M-1.5-2.5L.5 1e1")
        assert cmds == (MoveTo(-1.5, -2.5), LineTo(0.5, 10.0))

    def test_horizontal_vertical(self) -> None:
        cmds = parse_path_data("M 1 2 H 6 V 9 h -1 v -2")
        assert cmds == (MoveTo(1, 2), LineTo(6, 2), LineTo(6, 9), LineTo(5, 9), LineTo(5, 7))

    def test_close_returns_to_subpath_start(self) -> None:
        cmds = parse_path_data("M 10 10 l 5 0 z l 0 5")
        assert cmds[-1] == LineTo(10, 15)

    def test_curves_kept_as_unsupported(self) -> None:
        cmds = parse_path_data("M 0 0 C 1 1 2 2 3 3 l 1 0")
        assert cmds[1] == Unsupported("C", (1.0, 1.0, 2.0, 2.0, 3.0, 3.0))
        # Current point advanced to the curve end
        assert cmds[2] == LineTo(4, 3)

    def test_empty(self) -> None:
        assert parse_path_data("") == ()

    def test_bad_character(self) -> None:
        with pytest.raises(PathDataError, match="Unexpected character"):
            parse_path_data("M 0 0 X 1 1")

    def test_number_before_command(self) -> None:
        with pytest.raises(PathDataError, match="must start with a command"):
            parse_path_data("10 10 L 0 0")

    def test_wrong_arity(self) -> None:
        with pytest.raises(PathDataError, match="multiple of 2"):
            parse_path_data("M 0 0 L 5")

    def test_close_with_arguments(self) -> None:
        with pytest.raises(PathDataError, match="takes no arguments"):
            parse_path_data("M 0 0 L 1 1 Z 4")


# ---------------------------------------------------------------------------
# Formatting / results
# ---------------------------------------------------------------------------


class TestFormatting:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (12, "12"),
            (-3, "-3"),
            (12.304, "12.3"),
            (5.0, "5.0"),
            (100.0, "100.0"),
            (1.2345, "1.23"),
            (-7.456, "-7.46"),
            (-0.001, "0.0"),
        ],
    )
    def test_format_number(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    def test_format_path_data(self) -> None:
        cmds = (MoveTo(0, 0), LineTo(10.5, 0.25), Unsupported("Q", (1, 2, 3, 4)), ClosePath())
        assert format_path_data(cmds) == "M 0 0 L 10.5 0.25 Q 1 2 3 4 Z"

    def test_parse_then_format(self) -> None:
        assert format_path_data(parse_path_data("M 0 0 L 10.5 0 Z")) == "M 0.0 0.0 L 10.5 0.0 Z"


class TestPathResult:
    def test_empty(self) -> None:
        result = PathResult(attrs={"stroke": "black"})
        assert result.is_empty
        assert result.d == ""
        assert result.points == []
        assert len(result) == 0

    def test_points_and_d(self) -> None:
        result = PathResult(
            commands=(MoveTo(1, 2), LineTo(3, 4), ClosePath()),
            closed=True,
        )
        assert result.points == [(1, 2), (3, 4)]
        assert result.d == "M 1 2 L 3 4 Z"
        assert len(result) == 3
