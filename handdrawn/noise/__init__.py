"""Seeded procedural noise (gradient, simplex, fractal)."""

from handdrawn.noise.field import (
    NoiseState,
    fractal2,
    perlin2,
    perlin_grid,
    seed,
    simplex2,
)

__all__ = [
    "NoiseState",
    "fractal2",
    "perlin2",
    "perlin_grid",
    "seed",
    "simplex2",
]
