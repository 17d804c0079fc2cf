"""Noise displacement of sampled points.

Two strategies:

Cartesian
    Each point moves along its local unit normal by
    ``noise(x * frequency, y * frequency) * amplitude``.  The tangent is
    the vector from the previous to the next point, clamped at the ends.
    Used for open shapes and whenever cartesian mode is forced.

Polar
    Points are generated at N uniform angles around a centre.  Noise is
    read at ``(cos θ, sin θ) * frequency``, a circle in noise space, so
    θ = 0 and θ = 2π read the same value and the outline closes without a
    seam whatever the shape's size.  The radius at each angle is the
    shape's own radius (circle, ellipse) or the distance from the centroid
    to the polygon boundary along that ray.

With ``amplitude == 0`` every function returns the undisplaced geometry.
"""

from __future__ import annotations

import math
from typing import Sequence

from handdrawn.configs.loader import PerturbationConfig
from handdrawn.noise.field import NoiseState, fractal2, perlin2
from handdrawn.shapes.descriptors import Point

# Ray/edge pairs with a smaller cross product are treated as parallel
PARALLEL_EPS = 1.0e-10


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def noise_at(x: float, y: float, state: NoiseState, config: PerturbationConfig) -> float:
    """Single-octave gradient noise, or fractal noise when ``octaves > 1``."""
    if config.octaves > 1:
        return fractal2(
            x, y, state,
            octaves=config.octaves,
            persistence=config.persistence,
            lacunarity=config.lacunarity,
        )
    return perlin2(x, y, state)


def normal_at(points: Sequence[Point], index: int) -> Point:
    """Unit normal at ``points[index]``.

    The tangent runs from the previous to the next point (the point itself
    at either end) and is rotated 90° counter-clockwise.  A zero-length
    tangent gives ``(0, 1)``.
    """
    last = len(points) - 1
    prev_x, prev_y = points[max(index - 1, 0)]
    next_x, next_y = points[min(index + 1, last)]

    dx = next_x - prev_x
    dy = next_y - prev_y
    length = math.hypot(dx, dy)
    if length == 0:
        return (0.0, 1.0)
    return (-dy / length, dx / length)


def _angles(samples: int) -> list[float]:
    return [2 * math.pi * i / samples for i in range(samples)]


def _polar_noise(theta: float, state: NoiseState, config: PerturbationConfig) -> float:
    return noise_at(
        math.cos(theta) * config.frequency,
        math.sin(theta) * config.frequency,
        state,
        config,
    )


# ---------------------------------------------------------------------------
# Cartesian
# ---------------------------------------------------------------------------


def displace_cartesian(
    points: Sequence[Point],
    state: NoiseState,
    config: PerturbationConfig,
) -> list[Point]:
    """Displace each point along its normal.

    Parameters
    ----------
    points : Sequence[Point]
        Sampled points in drawing order.
    state : NoiseState
        Seeded noise tables.
    config : PerturbationConfig
        Uses ``amplitude``, ``frequency``, ``octaves``, ``persistence`` and
        ``lacunarity``.

    Returns
    -------
    list[Point]
        New points, same count.  Fewer than 2 input points are returned
        unchanged (no tangent to speak of).
    """
    if len(points) < 2:
        return list(points)

    freq = config.frequency
    amplitude = config.amplitude
    displaced: list[Point] = []
    for i, (x, y) in enumerate(points):
        nx, ny = normal_at(points, i)
        offset = noise_at(x * freq, y * freq, state, config) * amplitude
        displaced.append((x + nx * offset, y + ny * offset))
    return displaced


# ---------------------------------------------------------------------------
# Polar
# ---------------------------------------------------------------------------


def displace_circle_polar(
    cx: float,
    cy: float,
    r: float,
    state: NoiseState,
    config: PerturbationConfig,
) -> list[Point]:
    """``config.samples`` points around a circle with noisy radius."""
    points: list[Point] = []
    for theta in _angles(config.samples):
        radius = r + _polar_noise(theta, state, config) * config.amplitude
        points.append((cx + radius * math.cos(theta), cy + radius * math.sin(theta)))
    return points


def displace_ellipse_polar(
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    state: NoiseState,
    config: PerturbationConfig,
) -> list[Point]:
    """``config.samples`` points around an ellipse with noisy radii.

    The same absolute offset is added to ``rx`` and ``ry``, so on a very
    elongated ellipse the minor axis wobbles proportionally more.
    """
    points: list[Point] = []
    for theta in _angles(config.samples):
        offset = _polar_noise(theta, state, config) * config.amplitude
        points.append((
            cx + (rx + offset) * math.cos(theta),
            cy + (ry + offset) * math.sin(theta),
        ))
    return points


def centroid(points: Sequence[Point]) -> Point:
    """Vertex average (not the area centroid)."""
    n = len(points)
    return (sum(p[0] for p in points) / n, sum(p[1] for p in points) / n)


def ray_edge_intersection(
    cx: float,
    cy: float,
    theta: float,
    p1: Point,
    p2: Point,
) -> float | None:
    """Distance along the ray from ``(cx, cy)`` at angle ``theta`` to edge p1-p2.

    Solves ``c + t·d = p1 + u·(p2 - p1)``.  Returns ``t`` when ``t > 0`` and
    ``0 <= u <= 1``, otherwise ``None`` (including parallel edges).
    """
    dx = math.cos(theta)
    dy = math.sin(theta)
    ex = p2[0] - p1[0]
    ey = p2[1] - p1[1]

    denom = dx * ey - dy * ex
    if abs(denom) < PARALLEL_EPS:
        return None

    wx = p1[0] - cx
    wy = p1[1] - cy
    t = (wx * ey - wy * ex) / denom
    u = (wx * dy - wy * dx) / denom
    if t > 0 and 0 <= u <= 1:
        return t
    return None


def radius_at_angle(points: Sequence[Point], cx: float, cy: float, theta: float) -> float:
    """Distance from ``(cx, cy)`` to the polygon boundary along ``theta``.

    The first edge (in vertex order, closing edge last) that the ray hits
    wins.  When no edge qualifies, which can happen for self-intersecting
    rings or a centre outside the polygon, the radius is 0.0.
    """
    n = len(points)
    for k in range(n):
        t = ray_edge_intersection(cx, cy, theta, points[k], points[(k + 1) % n])
        if t is not None:
            return t
    return 0.0


def displace_polygon_polar(
    points: Sequence[Point],
    state: NoiseState,
    config: PerturbationConfig,
) -> list[Point]:
    """``config.samples`` points around a polygon's centroid with noisy radius.

    Rings with fewer than 3 vertices are returned unchanged.
    """
    if len(points) < 3:
        return list(points)

    cx, cy = centroid(points)
    displaced: list[Point] = []
    for theta in _angles(config.samples):
        base = radius_at_angle(points, cx, cy, theta)
        radius = base + _polar_noise(theta, state, config) * config.amplitude
        displaced.append((cx + radius * math.cos(theta), cy + radius * math.sin(theta)))
    return displaced
