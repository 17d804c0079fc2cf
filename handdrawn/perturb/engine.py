"""Perturbation entry points.

A call runs shape -> sampler -> displacement (reading the noise field) ->
emitter and returns a ``PathResult`` carrying the shape's ``attrs``.

Strategy per shape (``auto`` / forced ``cartesian`` / forced ``polar``):

    Line, Polyline     cartesian / cartesian / cartesian (open shapes have
                       no centre to go polar around)
    Polygon, Rect      polar / arc-length resample + cartesian / polar
    Circle, Ellipse    polar / angular outline + cartesian / polar
    Path (closed)      cartesian / cartesian / polar around the vertices
    Path (open)        cartesian / cartesian / cartesian

A ``Path`` with fewer than 2 move/line vertices is handed back unchanged.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable

from handdrawn.configs.loader import PerturbationConfig
from handdrawn.noise.field import NoiseState, seed
from handdrawn.perturb.displacement import (
    displace_cartesian,
    displace_circle_polar,
    displace_ellipse_polar,
    displace_polygon_polar,
)
from handdrawn.perturb.emitter import emit
from handdrawn.perturb.sampler import (
    path_points,
    sample_ellipse_outline,
    sample_line,
    sample_polygon,
    sample_polyline,
)
from handdrawn.shapes.commands import PathResult
from handdrawn.shapes.descriptors import (
    Circle,
    Ellipse,
    Line,
    Path,
    Polygon,
    Polyline,
    Rect,
    Shape,
)

logger = logging.getLogger(__name__)


def _config(config: PerturbationConfig | None, overrides: dict[str, Any]) -> PerturbationConfig:
    return (config or PerturbationConfig()).with_overrides(**overrides)


def _open_mode(shape: Shape, cfg: PerturbationConfig) -> str:
    if cfg.mode == "polar":
        logger.debug("%s is open; polar mode falls back to cartesian", type(shape).__name__)
    return "cartesian"


def _perturb(shape: Shape, cfg: PerturbationConfig, state: NoiseState) -> PathResult:
    n = cfg.samples

    match shape:
        case Line():
            mode = _open_mode(shape, cfg)
            points = displace_cartesian(sample_line(shape, n), state, cfg)

        case Polyline(points=vertices):
            mode = _open_mode(shape, cfg)
            points = displace_cartesian(sample_polyline(vertices, n), state, cfg)

        case Rect():
            return _perturb(shape.to_polygon(), cfg, state)

        case Polygon(points=vertices):
            mode = cfg.resolve_mode(closed=True)
            if mode == "polar":
                points = displace_polygon_polar(vertices, state, cfg)
            else:
                points = displace_cartesian(sample_polygon(vertices, n), state, cfg)

        case Circle(cx=cx, cy=cy, r=r):
            mode = cfg.resolve_mode(closed=True)
            if mode == "polar":
                points = displace_circle_polar(cx, cy, r, state, cfg)
            else:
                points = displace_cartesian(sample_ellipse_outline(cx, cy, r, r, n), state, cfg)

        case Ellipse(cx=cx, cy=cy, rx=rx, ry=ry):
            mode = cfg.resolve_mode(closed=True)
            if mode == "polar":
                points = displace_ellipse_polar(cx, cy, rx, ry, state, cfg)
            else:
                points = displace_cartesian(sample_ellipse_outline(cx, cy, rx, ry, n), state, cfg)

        case Path():
            vertices = path_points(shape)
            if len(vertices) < 2:
                logger.debug("Path has %d vertices; returning it unchanged", len(vertices))
                return PathResult(commands=shape.commands, attrs=shape.attrs, closed=shape.closed)

            if shape.closed and cfg.mode == "polar":
                mode = "polar"
                points = displace_polygon_polar(vertices, state, cfg)
            elif shape.closed:
                mode = "cartesian"
                points = displace_cartesian(sample_polygon(vertices, n), state, cfg)
            else:
                mode = _open_mode(shape, cfg)
                points = displace_cartesian(sample_polyline(vertices, n), state, cfg)

        case _:
            raise TypeError(f"Cannot perturb {type(shape).__name__}; expected a handdrawn shape")

    logger.debug(
        "%s: %s mode, %d points, amplitude=%s seed=%s",
        type(shape).__name__, mode, len(points), cfg.amplitude, cfg.seed,
    )
    return emit(points, shape.attrs, shape.closed)


def perturb(
    shape: Shape,
    config: PerturbationConfig | None = None,
    **overrides: Any,
) -> PathResult:
    """Turn a clean shape into a noisy, hand-drawn-looking path.

    Parameters
    ----------
    shape : Shape
        One of ``Line``, ``Polyline``, ``Polygon``, ``Rect``, ``Circle``,
        ``Ellipse`` or ``Path``.  Not modified.
    config : PerturbationConfig | None
        Parameters; ``None`` uses the defaults.
    **overrides
        Field overrides applied on top of *config*
        (e.g. ``amplitude=5.0, seed=42``).

    Returns
    -------
    PathResult
        Move/line commands (plus close for closed shapes) and the shape's
        ``attrs``.

    Raises
    ------
    TypeError
        If *shape* is not a handdrawn shape.

    Examples
    --------
    >>> result = perturb(Circle(50, 50, 25), amplitude=5.0, seed=42)
    >>> result.d.startswith("M ") and result.d.endswith(" Z")
    True
    """
    cfg = _config(config, overrides)
    return _perturb(shape, cfg, seed(cfg.seed))


def perturb_many(
    shapes: Iterable[Shape],
    config: PerturbationConfig | None = None,
    max_workers: int | None = None,
    **overrides: Any,
) -> list[PathResult]:
    """Perturb independent shapes on a thread pool.

    Results are returned in input order.  Every shape uses the same config
    (and therefore the same seed); the first ``TypeError`` raised by any
    shape propagates.
    """
    cfg = _config(config, overrides)
    shapes = list(shapes)
    if not shapes:
        return []

    logger.debug("Perturbing %d shapes (max_workers=%s)", len(shapes), max_workers)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(lambda s: perturb(s, cfg), shapes))


def progression(
    shape: Shape,
    steps: int = 24,
    max_amplitude: float = 3.0,
    max_frequency: float = 0.015,
    base_seed: int = 1000,
    config: PerturbationConfig | None = None,
) -> list[PathResult]:
    """Perturb one shape with linearly increasing strength.

    Step 0 is the clean shape (amplitude and frequency 0).  Step ``k``
    uses ``k / (steps - 1)`` of *max_amplitude* and *max_frequency* and
    seed ``base_seed + k``.  Handy for calibration sheets where each cell
    is a little rougher than the previous one.

    Parameters
    ----------
    shape : Shape
        Shape to repeat.
    steps : int
        Number of results, default 24 (a 6 × 4 grid).
    max_amplitude, max_frequency : float
        Values reached at the last step.
    base_seed : int
        Seed offset for the steps.
    config : PerturbationConfig | None
        Remaining parameters; default 4 octaves and 80 samples.

    Returns
    -------
    list[PathResult]
        ``steps`` results, weakest first.
    """
    base = config or PerturbationConfig(octaves=4, samples=80)
    results: list[PathResult] = []
    for k in range(steps):
        t = k / (steps - 1) if steps > 1 else 0.0
        cfg = base.with_overrides(
            amplitude=t * max_amplitude,
            frequency=t * max_frequency,
            seed=base_seed + k,
        )
        results.append(perturb(shape, cfg))
    return results
