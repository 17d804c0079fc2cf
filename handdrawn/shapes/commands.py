"""Path commands and the perturbation result type.

Every command is an immutable, slotted dataclass.  Coordinates are
absolute; relative SVG commands are resolved when path data is parsed
(see ``handdrawn.shapes.path_data``).

Only ``MoveTo``, ``LineTo`` and ``ClosePath`` are produced by the
perturbation engine.  ``Unsupported`` carries curve and arc commands from
parsed input through unchanged so that a no-op perturbation can hand back
the input path data.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union

# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new subpath at ``(x, y)``."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight segment from the current point to ``(x, y)``."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class ClosePath:
    """Close the current subpath back to its start."""

    pass


@dataclass(frozen=True, slots=True)
class Unsupported:
    """A command the sampler does not understand (curves, arcs).

    Parameters
    ----------
    op : str
        SVG command letter as written (case preserved).
    args : tuple[float, ...]
        Raw numeric arguments.
    """

    op: str
    args: tuple[float, ...] = ()


PathCommand = Union[MoveTo, LineTo, ClosePath, Unsupported]


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_number(value: float) -> str:
    """Compact, stable rendering of a coordinate.

    Integers are written verbatim.  Floats are rounded to two decimals with
    trailing zeros trimmed, keeping at least one decimal digit::

        12     -> "12"
        12.304 -> "12.3"
        5.0    -> "5.0"
        -0.001 -> "0.0"
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)

    text = f"{value:.2f}".rstrip("0")
    if text.endswith("."):
        text += "0"
    if text == "-0.0":
        text = "0.0"
    return text


def format_command(cmd: PathCommand) -> str:
    """Render a single command as SVG path data."""
    match cmd:
        case MoveTo(x=x, y=y):
            return f"M {format_number(x)} {format_number(y)}"
        case LineTo(x=x, y=y):
            return f"L {format_number(x)} {format_number(y)}"
        case ClosePath():
            return "Z"
        case Unsupported(op=op, args=args):
            return " ".join([op, *(format_number(a) for a in args)])
    raise TypeError(f"Not a path command: {cmd!r}")


def format_path_data(commands: tuple[PathCommand, ...] | list[PathCommand]) -> str:
    """Join commands into an SVG ``d`` attribute value."""
    return " ".join(format_command(c) for c in commands)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PathResult:
    """Generic path produced by a perturbation.

    Parameters
    ----------
    commands : tuple[PathCommand, ...]
        ``MoveTo`` first, then ``LineTo`` for every further point, then
        ``ClosePath`` when ``closed``.  Empty for degenerate input.
    attrs : Mapping[str, Any]
        Style attributes of the source shape, passed through untouched.
    closed : bool
        Closed-ness of the source shape.
    """

    commands: tuple[PathCommand, ...] = ()
    attrs: Mapping[str, Any] = field(default_factory=dict)
    closed: bool = False

    @property
    def d(self) -> str:
        """SVG path data; empty string for an empty path."""
        return format_path_data(self.commands)

    @property
    def points(self) -> list[tuple[float, float]]:
        """Vertices of the move/line commands, in order."""
        return [(c.x, c.y) for c in self.commands if isinstance(c, (MoveTo, LineTo))]

    @property
    def is_empty(self) -> bool:
        return not self.commands

    def __len__(self) -> int:
        return len(self.commands)
