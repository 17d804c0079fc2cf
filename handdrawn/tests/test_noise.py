"""Tests for the seeded noise field.

Validates seed folding, table layout, determinism, known values, output
range, fractal normalisation, and the vectorised grid evaluator.
"""

from __future__ import annotations

import numpy as np
import pytest

from handdrawn.noise.field import (
    GRAD3,
    P,
    NoiseState,
    fractal2,
    perlin2,
    perlin_grid,
    seed,
    simplex2,
)


@pytest.fixture()
def state() -> NoiseState:
    return seed(42)


def _grid(n: int = 41, lo: float = -7.3, hi: float = 13.9) -> list[tuple[float, float]]:
    coords = np.linspace(lo, hi, n)
    return [(float(x), float(y)) for x in coords for y in coords]


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------


class TestSeed:
    def test_tables_are_doubled(self, state: NoiseState) -> None:
        assert len(state.perm) == 512
        assert len(state.grad_p) == 512
        assert state.perm[:256] == state.perm[256:]
        assert state.grad_p[:256] == state.grad_p[256:]

    def test_gradients_follow_permutation(self, state: NoiseState) -> None:
        for i in range(512):
            assert state.grad_p[i] == GRAD3[state.perm[i] % 12]

    def test_seed_zero_keeps_base_permutation(self) -> None:
        assert seed(0).perm[:256] == P

    def test_same_seed_same_state(self) -> None:
        assert seed(42) == seed(42)

    def test_small_seed_folds_low_byte_into_high(self) -> None:
        # 1 -> 1 | (1 << 8) == 257
        assert seed(1) == seed(257)

    def test_fraction_seed_is_scaled(self) -> None:
        assert seed(0.5) == seed(32768)

    def test_float_seed_is_floored(self) -> None:
        assert seed(1000.9) == seed(1000)

    def test_odd_entries_use_low_byte(self) -> None:
        s = 0x1234  # low byte 0x34, high byte 0x12
        st = seed(s)
        assert st.perm[1] == P[1] ^ 0x34
        assert st.perm[0] == P[0] ^ 0x12

    def test_negative_seed_is_defined(self) -> None:
        st = seed(-17)
        assert len(st.perm) == 512
        assert all(0 <= v < 256 for v in st.perm)


# ---------------------------------------------------------------------------
# Point evaluators
# ---------------------------------------------------------------------------


class TestPerlin2:
    def test_deterministic(self, state: NoiseState) -> None:
        assert perlin2(1.5, 2.3, state) == perlin2(1.5, 2.3, state)

    def test_reproducible_across_states(self) -> None:
        assert perlin2(1.0, 1.0, seed(42)) == perlin2(1.0, 1.0, seed(42))

    def test_different_seeds_differ(self) -> None:
        assert perlin2(1.5, 2.3, seed(42)) != perlin2(1.5, 2.3, seed(123))

    def test_known_values(self) -> None:
        assert perlin2(1.5, 2.3, seed(42)) == pytest.approx(0.19615, abs=1e-9)
        assert perlin2(1.5, 2.3, seed(123)) == pytest.approx(0.292922, abs=1e-9)

    def test_zero_on_lattice(self, state: NoiseState) -> None:
        for x, y in [(0, 0), (3, -2), (255, 256), (-1000, 17)]:
            assert perlin2(x, y, state) == 0.0

    def test_range(self, state: NoiseState) -> None:
        for x, y in _grid():
            assert -1.0 <= perlin2(x, y, state) <= 1.0

    def test_wraps_every_256_cells(self, state: NoiseState) -> None:
        assert perlin2(3.25, 7.75, state) == pytest.approx(perlin2(259.25, 263.75, state))


class TestSimplex2:
    def test_deterministic(self, state: NoiseState) -> None:
        assert simplex2(0.7, -3.1, state) == simplex2(0.7, -3.1, state)

    def test_range(self, state: NoiseState) -> None:
        for x, y in _grid():
            assert -1.0 <= simplex2(x, y, state) <= 1.0

    def test_not_constant(self, state: NoiseState) -> None:
        values = {round(simplex2(x, y, state), 9) for x, y in _grid(9)}
        assert len(values) > 10

    def test_seed_changes_output(self) -> None:
        pts = _grid(7)
        a = [simplex2(x, y, seed(1)) for x, y in pts]
        b = [simplex2(x, y, seed(2)) for x, y in pts]
        assert a != b


class TestFractal2:
    def test_single_octave_is_perlin(self, state: NoiseState) -> None:
        for x, y in _grid(9):
            assert fractal2(x, y, state, octaves=1) == perlin2(x, y, state)

    def test_normalised_range(self, state: NoiseState) -> None:
        for octaves in (2, 4, 8):
            for x, y in _grid(15):
                assert -1.0 <= fractal2(x, y, state, octaves=octaves) <= 1.0

    def test_weighted_sum(self, state: NoiseState) -> None:
        x, y = 0.37, 1.91
        expected = (perlin2(x, y, state) + 0.5 * perlin2(2 * x, 2 * y, state)) / 1.5
        assert fractal2(x, y, state, octaves=2, persistence=0.5) == pytest.approx(expected)

    def test_lacunarity(self, state: NoiseState) -> None:
        x, y = 0.37, 1.91
        expected = (perlin2(x, y, state) + 0.5 * perlin2(3 * x, 3 * y, state)) / 1.5
        assert fractal2(x, y, state, octaves=2, lacunarity=3.0) == pytest.approx(expected)

    def test_octaves_change_output(self, state: NoiseState) -> None:
        assert fractal2(0.37, 1.91, state, octaves=1) != fractal2(0.37, 1.91, state, octaves=4)


# ---------------------------------------------------------------------------
# Vectorised evaluation
# ---------------------------------------------------------------------------


class TestPerlinGrid:
    def test_matches_scalar(self, state: NoiseState) -> None:
        xs, ys = np.meshgrid(np.linspace(-3.3, 4.7, 17), np.linspace(-2.1, 5.2, 13))
        grid = perlin_grid(xs, ys, state)
        assert grid.shape == xs.shape
        for (i, j), value in np.ndenumerate(grid):
            assert value == pytest.approx(perlin2(xs[i, j], ys[i, j], state), abs=1e-12)

    def test_matches_fractal(self, state: NoiseState) -> None:
        xs, ys = np.meshgrid(np.linspace(0.1, 2.9, 7), np.linspace(0.2, 3.3, 5))
        grid = perlin_grid(xs, ys, state, octaves=3, persistence=0.6)
        for (i, j), value in np.ndenumerate(grid):
            expected = fractal2(xs[i, j], ys[i, j], state, octaves=3, persistence=0.6)
            assert value == pytest.approx(expected, abs=1e-12)

    def test_range(self, state: NoiseState) -> None:
        xs, ys = np.meshgrid(np.linspace(-50, 50, 101), np.linspace(-50, 50, 101))
        grid = perlin_grid(xs * 0.37, ys * 0.37, state, octaves=4)
        assert grid.min() >= -1.0
        assert grid.max() <= 1.0

    def test_shape_mismatch(self, state: NoiseState) -> None:
        with pytest.raises(ValueError, match="same shape"):
            perlin_grid(np.zeros((2, 3)), np.zeros((3, 2)), state)
