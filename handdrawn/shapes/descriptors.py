"""Shape descriptors -- the input vocabulary of the perturbation engine.

Every shape is an immutable, slotted dataclass with plain numeric fields
and an ``attrs`` mapping of style attributes (stroke, fill, ...).  The
engine never reads or modifies ``attrs``; it is copied onto the result.

The set of shapes is closed.  The engine dispatches with a ``match`` over
these seven classes, so adding a shape means adding a case there too.

Open shapes:   ``Line``, ``Polyline``, open ``Path``
Closed shapes: ``Polygon``, ``Rect``, ``Circle``, ``Ellipse``, closed ``Path``
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from handdrawn.shapes.commands import PathCommand
from handdrawn.shapes.path_data import is_closed, parse_path_data

Point = tuple[float, float]


def _as_points(points: Iterable[Iterable[float]]) -> tuple[Point, ...]:
    return tuple((p[0], p[1]) for p in (tuple(q) for q in points))


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Shape(ABC):
    """Base class for all shape descriptors."""

    @property
    def closed(self) -> bool:
        return False


# ---------------------------------------------------------------------------
# Open shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Line(Shape):
    """Straight segment from ``(x1, y1)`` to ``(x2, y2)``."""

    x1: float
    y1: float
    x2: float
    y2: float
    attrs: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Polyline(Shape):
    """Open chain of vertices.

    Parameters
    ----------
    points : tuple[tuple[float, float], ...]
        Ordered vertices.  Any iterable of pairs is accepted and stored as
        a tuple of tuples.
    """

    points: tuple[Point, ...]
    attrs: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _as_points(self.points))


# ---------------------------------------------------------------------------
# Closed shapes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Polygon(Shape):
    """Closed ring of vertices; the closing edge is implicit."""

    points: tuple[Point, ...]
    attrs: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _as_points(self.points))

    @property
    def closed(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Rect(Shape):
    """Axis-aligned rectangle with top-left corner ``(x, y)``."""

    x: float
    y: float
    width: float
    height: float
    attrs: Mapping[str, Any] = field(default_factory=dict)

    @property
    def closed(self) -> bool:
        return True

    def to_polygon(self) -> Polygon:
        """Corners clockwise from top-left (in +Y-down coordinates)."""
        return Polygon(
            points=(
                (self.x, self.y),
                (self.x + self.width, self.y),
                (self.x + self.width, self.y + self.height),
                (self.x, self.y + self.height),
            ),
            attrs=self.attrs,
        )


@dataclass(frozen=True, slots=True)
class Circle(Shape):
    """Circle of radius ``r`` centred on ``(cx, cy)``."""

    cx: float
    cy: float
    r: float
    attrs: Mapping[str, Any] = field(default_factory=dict)

    @property
    def closed(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Ellipse(Shape):
    """Axis-aligned ellipse with radii ``rx``, ``ry`` centred on ``(cx, cy)``."""

    cx: float
    cy: float
    rx: float
    ry: float
    attrs: Mapping[str, Any] = field(default_factory=dict)

    @property
    def closed(self) -> bool:
        return True


# ---------------------------------------------------------------------------
# Existing path data
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Path(Shape):
    """Pre-built path.

    Parameters
    ----------
    commands : tuple[PathCommand, ...]
        Absolute path commands.
    is_closed : bool
        Whether the path is closed.  ``Path.from_d`` derives it from the
        presence of a ``Z``/``z`` command.
    """

    commands: tuple[PathCommand, ...]
    is_closed: bool = False
    attrs: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "commands", tuple(self.commands))

    @property
    def closed(self) -> bool:
        return self.is_closed

    @classmethod
    def from_d(cls, d: str, **attrs: Any) -> Path:
        """Build a ``Path`` from an SVG ``d`` string.

        Examples
        --------
        >>> p = Path.from_d("M 0 0 L 10 0 L 10 10 Z", stroke="black")
        >>> p.closed
        True
        """
        commands = parse_path_data(d)
        return cls(commands=commands, is_closed=is_closed(commands), attrs=attrs)
