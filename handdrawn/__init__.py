"""
handdrawn: noise-perturbed paths for pen plotters.

Turns clean geometry (lines, polylines, polygons, rectangles, circles,
ellipses, existing paths) into organic, hand-drawn-looking path data.

Subpackages:
    noise: Seeded gradient, simplex and fractal noise
    shapes: Shape descriptors, path commands, path-data parsing
    perturb: Sampling, displacement and path emission
    configs: Perturbation parameters and YAML loading
    utils: Logging setup and YAML helpers

Usage::

    from handdrawn import Circle, perturb
    path = perturb(Circle(50, 50, 25, attrs={"stroke": "black"}), amplitude=5.0, seed=42)
    path.d  # "M <x> <y> L <x> <y> ... Z"
"""

import logging

from handdrawn.configs import ConfigError, PerturbationConfig, load_config
from handdrawn.perturb import perturb, perturb_many, progression
from handdrawn.shapes import (
    Circle,
    Ellipse,
    Line,
    Path,
    PathResult,
    Polygon,
    Polyline,
    Rect,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Circle",
    "ConfigError",
    "Ellipse",
    "Line",
    "Path",
    "PathResult",
    "PerturbationConfig",
    "Polygon",
    "Polyline",
    "Rect",
    "load_config",
    "perturb",
    "perturb_many",
    "progression",
]
