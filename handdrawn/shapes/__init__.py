"""
Shape descriptors and path results.

Defines the immutable input shapes accepted by the perturbation engine,
the path commands it emits, and SVG path-data parsing/formatting.
"""

from handdrawn.shapes.commands import (
    ClosePath,
    LineTo,
    MoveTo,
    PathCommand,
    PathResult,
    Unsupported,
    format_number,
    format_path_data,
)
from handdrawn.shapes.descriptors import (
    Circle,
    Ellipse,
    Line,
    Path,
    Point,
    Polygon,
    Polyline,
    Rect,
    Shape,
)
from handdrawn.shapes.path_data import PathDataError, parse_path_data

__all__ = [
    "Circle",
    "ClosePath",
    "Ellipse",
    "Line",
    "LineTo",
    "MoveTo",
    "Path",
    "PathCommand",
    "PathDataError",
    "PathResult",
    "Point",
    "Polygon",
    "Polyline",
    "Rect",
    "Shape",
    "Unsupported",
    "format_number",
    "format_path_data",
    "parse_path_data",
]
