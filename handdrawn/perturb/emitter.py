"""Point lists to ``PathResult``.

Closed-ness always comes from the source shape, never from whether the
first and last points happen to coincide.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from handdrawn.shapes.commands import (
    ClosePath,
    LineTo,
    MoveTo,
    PathCommand,
    PathResult,
    format_number,
)
from handdrawn.shapes.descriptors import Point

MIN_OPEN_POINTS = 2
MIN_CLOSED_POINTS = 3


def emit(
    points: Sequence[Point],
    attrs: Mapping[str, Any],
    closed: bool,
) -> PathResult:
    """Build ``MoveTo``, ``LineTo``…, and ``ClosePath`` iff *closed*.

    Parameters
    ----------
    points : Sequence[Point]
        Final (displaced) points.
    attrs : Mapping[str, Any]
        Style attributes of the source shape, forwarded as-is.
    closed : bool
        Closed-ness of the source shape.

    Returns
    -------
    PathResult
        Empty (no commands) when an open path has fewer than 2 points or a
        closed path fewer than 3.
    """
    minimum = MIN_CLOSED_POINTS if closed else MIN_OPEN_POINTS
    if len(points) < minimum:
        return PathResult(commands=(), attrs=attrs, closed=closed)

    (x0, y0), rest = points[0], points[1:]
    commands: list[PathCommand] = [MoveTo(x0, y0)]
    commands.extend(LineTo(x, y) for x, y in rest)
    if closed:
        commands.append(ClosePath())

    return PathResult(commands=tuple(commands), attrs=attrs, closed=closed)


__all__ = ["MIN_CLOSED_POINTS", "MIN_OPEN_POINTS", "emit", "format_number"]
