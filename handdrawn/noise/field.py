"""Seeded gradient and simplex noise for path perturbation.

Provides:
    - ``seed()``: build an immutable permutation/gradient table from any number
    - ``perlin2()``: classic 2D gradient noise in [-1, 1]
    - ``simplex2()``: 2D simplex noise in [-1, 1]
    - ``fractal2()``: octave-summed gradient noise, normalised by total amplitude
    - ``perlin_grid()``: vectorised evaluation over numpy coordinate arrays

The permutation and gradient tables follow Stefan Gustavson's public-domain
reference (as popularised by noisejs), so a given seed produces the same field
as any other implementation of that table layout.

Determinism:
    Every function here is a pure function of its arguments.  There is no
    module-level random state; two ``NoiseState`` objects built from the same
    seed compare equal and yield identical noise everywhere.

Usage::

    from handdrawn.noise import seed, perlin2
    state = seed(42)
    value = perlin2(1.5, 2.3, state)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

# ---------------------------------------------------------------------------
# Constant tables
# ---------------------------------------------------------------------------

GRAD3: tuple[tuple[int, int, int], ...] = (
    (1, 1, 0), (-1, 1, 0), (1, -1, 0), (-1, -1, 0),
    (1, 0, 1), (-1, 0, 1), (1, 0, -1), (-1, 0, -1),
    (0, 1, 1), (0, -1, 1), (0, 1, -1), (0, -1, -1),
)
"""Gradient directions; only the x/y components are used in 2D."""

P: tuple[int, ...] = (
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
)
"""Base permutation of 0..255, XOR-ed with seed bytes in ``seed()``."""

# Simplex skew / unskew factors
F2 = 0.5 * (math.sqrt(3.0) - 1.0)
G2 = (3.0 - math.sqrt(3.0)) / 6.0


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NoiseState:
    """Permutation and gradient tables for one seed.

    Parameters
    ----------
    perm : tuple[int, ...]
        512 entries; the 256 seeded values repeated twice so that
        ``perm[i + 1]`` never needs wrapping.
    grad_p : tuple[tuple[int, int, int], ...]
        512 gradient vectors, ``grad_p[i] == GRAD3[perm[i] % 12]``.
    """

    perm: tuple[int, ...]
    grad_p: tuple[tuple[int, int, int], ...]


def seed(value: float) -> NoiseState:
    """Build a ``NoiseState`` from any real number.

    Parameters
    ----------
    value : float
        Seed.  Values strictly between 0 and 1 are scaled by 65536 so that
        ``random.random()``-style seeds still spread across the table.

    Returns
    -------
    NoiseState
        Immutable tables; equal seeds give equal states.

    Notes
    -----
    Seeds below 256 only populate the low byte, which would leave every even
    table entry untouched, so the low byte is copied into the high byte.
    """
    if 0 < value < 1:
        value *= 65536
    s = math.floor(value)
    if s < 256:
        s |= s << 8

    low = s & 255
    high = (s >> 8) & 255

    perm: list[int] = []
    grad_p: list[tuple[int, int, int]] = []
    for i in range(256):
        v = P[i] ^ (low if i & 1 else high)
        perm.append(v)
        grad_p.append(GRAD3[v % 12])

    return NoiseState(perm=tuple(perm + perm), grad_p=tuple(grad_p + grad_p))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fade(t: float) -> float:
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return (1 - t) * a + t * b


def _dot2(g: tuple[int, int, int], x: float, y: float) -> float:
    return g[0] * x + g[1] * y


def _corner(x: float, y: float, g: tuple[int, int, int]) -> float:
    t = 0.5 - x * x - y * y
    if t < 0:
        return 0.0
    t *= t
    return t * t * _dot2(g, x, y)


# ---------------------------------------------------------------------------
# Point evaluators
# ---------------------------------------------------------------------------


def perlin2(x: float, y: float, state: NoiseState) -> float:
    """2D gradient noise at ``(x, y)``, in [-1, 1].

    Integer lattice points always evaluate to 0.
    """
    perm = state.perm
    grad_p = state.grad_p

    xi = math.floor(x)
    yi = math.floor(y)
    x = x - xi
    y = y - yi
    xi &= 255
    yi &= 255

    n00 = _dot2(grad_p[xi + perm[yi]], x, y)
    n01 = _dot2(grad_p[xi + perm[yi + 1]], x, y - 1)
    n10 = _dot2(grad_p[xi + 1 + perm[yi]], x - 1, y)
    n11 = _dot2(grad_p[xi + 1 + perm[yi + 1]], x - 1, y - 1)

    u = _fade(x)
    return _lerp(_lerp(n00, n10, u), _lerp(n01, n11, u), _fade(y))


def simplex2(x: float, y: float, state: NoiseState) -> float:
    """2D simplex noise at ``(x, y)``, in [-1, 1]."""
    perm = state.perm
    grad_p = state.grad_p

    # Skew input space to find the simplex cell
    s = (x + y) * F2
    i = math.floor(x + s)
    j = math.floor(y + s)
    t = (i + j) * G2
    x0 = x - i + t
    y0 = y - j + t

    if x0 > y0:
        i1, j1 = 1, 0  # lower triangle
    else:
        i1, j1 = 0, 1  # upper triangle

    x1 = x0 - i1 + G2
    y1 = y0 - j1 + G2
    x2 = x0 - 1 + 2 * G2
    y2 = y0 - 1 + 2 * G2

    i &= 255
    j &= 255

    n0 = _corner(x0, y0, grad_p[i + perm[j]])
    n1 = _corner(x1, y1, grad_p[i + i1 + perm[j + j1]])
    n2 = _corner(x2, y2, grad_p[i + 1 + perm[j + 1]])

    return 70 * (n0 + n1 + n2)


def fractal2(
    x: float,
    y: float,
    state: NoiseState,
    octaves: int = 4,
    persistence: float = 0.5,
    lacunarity: float = 2.0,
) -> float:
    """Octave-summed ``perlin2``.

    Parameters
    ----------
    x, y : float
        Coordinates in noise space.
    state : NoiseState
        Seeded tables.
    octaves : int
        Number of layers, default 4.
    persistence : float
        Amplitude multiplier per layer, default 0.5.
    lacunarity : float
        Frequency multiplier per layer, default 2.0.

    Returns
    -------
    float
        Weighted sum divided by the sum of weights, so the dynamic range
        matches a single ``perlin2`` call for any octave count.
    """
    total = 0.0
    amplitude = 1.0
    max_value = 0.0
    frequency = 1.0
    for _ in range(octaves):
        total += perlin2(x * frequency, y * frequency, state) * amplitude
        max_value += amplitude
        amplitude *= persistence
        frequency *= lacunarity

    if max_value == 0:
        return 0.0
    return total / max_value


# ---------------------------------------------------------------------------
# Vectorised evaluation
# ---------------------------------------------------------------------------


def _perlin_array(x: np.ndarray, y: np.ndarray, perm: np.ndarray, grad: np.ndarray) -> np.ndarray:
    xi = np.floor(x).astype(np.int64)
    yi = np.floor(y).astype(np.int64)
    xf = x - xi
    yf = y - yi
    xi &= 255
    yi &= 255

    g00 = grad[xi + perm[yi]]
    g01 = grad[xi + perm[yi + 1]]
    g10 = grad[xi + 1 + perm[yi]]
    g11 = grad[xi + 1 + perm[yi + 1]]

    n00 = g00[..., 0] * xf + g00[..., 1] * yf
    n01 = g01[..., 0] * xf + g01[..., 1] * (yf - 1)
    n10 = g10[..., 0] * (xf - 1) + g10[..., 1] * yf
    n11 = g11[..., 0] * (xf - 1) + g11[..., 1] * (yf - 1)

    u = xf * xf * xf * (xf * (xf * 6 - 15) + 10)
    v = yf * yf * yf * (yf * (yf * 6 - 15) + 10)

    nx0 = (1 - u) * n00 + u * n10
    nx1 = (1 - u) * n01 + u * n11
    return (1 - v) * nx0 + v * nx1


def perlin_grid(
    xs: np.ndarray,
    ys: np.ndarray,
    state: NoiseState,
    octaves: int = 1,
    persistence: float = 0.5,
    lacunarity: float = 2.0,
) -> np.ndarray:
    """Evaluate gradient noise over arrays of coordinates.

    Parameters
    ----------
    xs, ys : np.ndarray
        Coordinates in noise space, identical shapes (e.g. from
        ``np.meshgrid``).
    state : NoiseState
        Seeded tables.
    octaves, persistence, lacunarity
        As in ``fractal2``.  ``octaves <= 1`` gives plain ``perlin2``.

    Returns
    -------
    np.ndarray
        float64 array shaped like ``xs``; element-wise equal to the scalar
        ``perlin2``/``fractal2`` results.

    Raises
    ------
    ValueError
        If ``xs`` and ``ys`` have different shapes.
    """
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    if xs.shape != ys.shape:
        raise ValueError(f"xs and ys must have the same shape, got {xs.shape} and {ys.shape}")

    perm = np.asarray(state.perm, dtype=np.int64)
    grad = np.asarray(state.grad_p, dtype=np.float64)[:, :2]

    if octaves <= 1:
        return _perlin_array(xs, ys, perm, grad)

    total = np.zeros(xs.shape)
    amplitude = 1.0
    max_value = 0.0
    frequency = 1.0
    for _ in range(octaves):
        total += _perlin_array(xs * frequency, ys * frequency, perm, grad) * amplitude
        max_value += amplitude
        amplitude *= persistence
        frequency *= lacunarity

    return total / max_value
