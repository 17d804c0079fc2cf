"""Shape sampling -- analytic shapes to ordered point lists.

Provides:
    - Line: parametric interpolation between the endpoints
    - Polyline / polygon: arc-length-uniform resampling
    - Ellipse outline: angularly uniform points (forced-cartesian circles)
    - Path: vertex extraction from move/line commands

Arc-length walking keeps a segment cursor that only moves forward, since
targets increase monotonically.  Cost is O(samples + segments).

Circles and ellipses in polar mode are not sampled here; the polar
displacement functions generate their own angles.
"""

from __future__ import annotations

import math
from typing import Sequence

from handdrawn.shapes.commands import LineTo, MoveTo
from handdrawn.shapes.descriptors import Line, Path, Point


def sample_line(line: Line, samples: int) -> list[Point]:
    """``samples`` evenly spaced points from start to end inclusive.

    A single sample yields the start point only.
    """
    if samples < 2:
        return [(line.x1, line.y1)]

    dx = line.x2 - line.x1
    dy = line.y2 - line.y1
    last = samples - 1
    return [
        (line.x1 + dx * (i / last), line.y1 + dy * (i / last))
        for i in range(samples)
    ]


def segment_lengths(points: Sequence[Point]) -> list[float]:
    """Euclidean length of each consecutive segment."""
    return [
        math.hypot(x2 - x1, y2 - y1)
        for (x1, y1), (x2, y2) in zip(points, points[1:])
    ]


def sample_polyline(points: Sequence[Point], samples: int) -> list[Point]:
    """Resample an open chain at ``samples`` arc-length-uniform positions.

    Parameters
    ----------
    points : Sequence[Point]
        Ordered vertices.
    samples : int
        Number of output points (first and last land on the endpoints).

    Returns
    -------
    list[Point]
        Resampled points.  Chains with fewer than 2 vertices or zero total
        length are returned unchanged; ``samples == 1`` yields the first
        vertex.
    """
    if len(points) < 2:
        return list(points)

    lengths = segment_lengths(points)
    total = sum(lengths)
    if total == 0:
        return list(points)
    if samples < 2:
        return [points[0]]

    step = total / (samples - 1)
    last_seg = len(lengths) - 1

    result: list[Point] = []
    seg = 0
    seg_start = 0.0  # arc length at the start of segment ``seg``

    for i in range(samples):
        target = i * step

        # Advance the cursor; the final segment absorbs any rounding overshoot
        while seg < last_seg and target > seg_start + lengths[seg]:
            seg_start += lengths[seg]
            seg += 1

        seg_len = lengths[seg]
        t = (target - seg_start) / seg_len if seg_len > 0 else 0.0
        t = max(0.0, min(1.0, t))

        (x1, y1), (x2, y2) = points[seg], points[seg + 1]
        result.append((x1 + (x2 - x1) * t, y1 + (y2 - y1) * t))

    return result


def sample_polygon(points: Sequence[Point], samples: int) -> list[Point]:
    """Resample a closed ring (closing edge included).

    Rings with fewer than 3 vertices are returned unchanged.  The last
    sample coincides with the first vertex.
    """
    if len(points) < 3:
        return list(points)
    return sample_polyline([*points, points[0]], samples)


def sample_ellipse_outline(
    cx: float, cy: float, rx: float, ry: float, samples: int,
) -> list[Point]:
    """``samples`` points at uniform angles over [0, 2π), no duplicate endpoint."""
    return [
        (
            cx + rx * math.cos(2 * math.pi * i / samples),
            cy + ry * math.sin(2 * math.pi * i / samples),
        )
        for i in range(samples)
    ]


def path_points(path: Path) -> list[Point]:
    """Vertices of a path's move/line commands, in order.

    Curve and arc commands are skipped, so curved segments collapse to
    straight chords between the surrounding vertices.
    """
    return [(c.x, c.y) for c in path.commands if isinstance(c, (MoveTo, LineTo))]
