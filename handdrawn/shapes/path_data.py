"""SVG path-data parsing.

Turns a ``d`` attribute string into absolute ``PathCommand`` objects:

    - ``M``/``m`` -> ``MoveTo`` (extra coordinate pairs become ``LineTo``)
    - ``L``/``l``, ``H``/``h``, ``V``/``v`` -> ``LineTo``
    - ``Z``/``z`` -> ``ClosePath``
    - ``C S Q T A`` (either case) -> ``Unsupported``, args kept verbatim

Relative commands are resolved against the current point.  Curve commands
still advance the current point so that later relative segments land in
the right place.
"""

from __future__ import annotations

import re

from handdrawn.shapes.commands import ClosePath, LineTo, MoveTo, PathCommand, Unsupported


class PathDataError(ValueError):
    """Raised when a path-data string cannot be tokenised."""

    pass


_TOKEN_RE = re.compile(
    r"(?P<cmd>[MmLlHhVvCcSsQqTtAaZz])"
    r"|(?P<num>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
    r"|(?P<sep>[\s,]+)"
    r"|(?P<bad>.)",
    re.DOTALL,
)

# Arguments consumed per command repetition
_ARITY = {"M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "S": 4, "Q": 4, "T": 2, "A": 7, "Z": 0}


def _tokenize(d: str) -> list[tuple[str, list[float]]]:
    groups: list[tuple[str, list[float]]] = []
    for m in _TOKEN_RE.finditer(d):
        if m.group("cmd"):
            groups.append((m.group("cmd"), []))
        elif m.group("num"):
            if not groups:
                raise PathDataError(f"Path data must start with a command, got {m.group('num')!r}")
            groups[-1][1].append(float(m.group("num")))
        elif m.group("bad"):
            raise PathDataError(f"Unexpected character {m.group('bad')!r} at offset {m.start()}")
    return groups


def parse_path_data(d: str) -> tuple[PathCommand, ...]:
    """Parse an SVG path-data string.

    Parameters
    ----------
    d : str
        Path data, e.g. ``"M 0 0 L 10 0 l 0 10 Z"``.

    Returns
    -------
    tuple[PathCommand, ...]
        Commands with absolute coordinates.

    Raises
    ------
    PathDataError
        On stray characters, numbers before the first command, or an
        argument count that does not fit the command.
    """
    commands: list[PathCommand] = []
    cx = cy = 0.0
    start_x = start_y = 0.0

    for op, args in _tokenize(d):
        upper = op.upper()
        relative = op.islower()
        arity = _ARITY[upper]

        if arity == 0:
            if args:
                raise PathDataError(f"'{op}' takes no arguments, got {len(args)}")
            commands.append(ClosePath())
            cx, cy = start_x, start_y
            continue

        if not args or len(args) % arity:
            raise PathDataError(
                f"'{op}' expects a multiple of {arity} arguments, got {len(args)}"
            )

        for k in range(0, len(args), arity):
            chunk = args[k:k + arity]

            if upper in ("M", "L"):
                x, y = chunk
                if relative:
                    x, y = cx + x, cy + y
                if upper == "M" and k == 0:
                    commands.append(MoveTo(x, y))
                    start_x, start_y = x, y
                else:
                    commands.append(LineTo(x, y))
                cx, cy = x, y
            elif upper == "H":
                cx = cx + chunk[0] if relative else chunk[0]
                commands.append(LineTo(cx, cy))
            elif upper == "V":
                cy = cy + chunk[0] if relative else chunk[0]
                commands.append(LineTo(cx, cy))
            else:
                commands.append(Unsupported(op, tuple(chunk)))
                x, y = chunk[-2], chunk[-1]
                cx, cy = (cx + x, cy + y) if relative else (x, y)

    return tuple(commands)


def is_closed(commands: tuple[PathCommand, ...] | list[PathCommand]) -> bool:
    """``True`` when any subpath is closed."""
    return any(isinstance(c, ClosePath) for c in commands)
