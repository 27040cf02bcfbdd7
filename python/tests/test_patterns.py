"""Pattern generator — formulas, value ranges and determinism."""

from __future__ import annotations

import pytest

from tileswap.engine.patterns import PatternGenerator
from tileswap.models.level import PatternId


@pytest.mark.parametrize("pattern", list(PatternId))
@pytest.mark.parametrize("grid_size", [3, 4, 5])
@pytest.mark.parametrize("tile_types", [3, 5, 7])
def test_cells_in_range_and_deterministic(
    pattern: PatternId, grid_size: int, tile_types: int
) -> None:
    first = PatternGenerator.generate(pattern, grid_size, tile_types)
    second = PatternGenerator.generate(pattern, grid_size, tile_types)

    assert first == second
    assert len(first) == grid_size
    assert all(len(row) == grid_size for row in first)
    assert all(0 <= v < tile_types for row in first for v in row)


def test_checkerboard() -> None:
    assert PatternGenerator.generate(PatternId.CHECKERBOARD, 3, 3) == [
        [0, 1, 0],
        [1, 0, 1],
        [0, 1, 0],
    ]


def test_stripes_cycle_over_at_most_three_types() -> None:
    grid = PatternGenerator.generate(PatternId.STRIPES, 4, 5)
    assert [row[0] for row in grid] == [0, 1, 2, 0]
    assert all(len(set(row)) == 1 for row in grid)


def test_corners() -> None:
    assert PatternGenerator.generate(PatternId.CORNERS, 3, 4) == [
        [1, 0, 1],
        [0, 0, 0],
        [1, 0, 1],
    ]


def test_diagonal() -> None:
    grid = PatternGenerator.generate(PatternId.DIAGONAL, 4, 5)
    for i in range(4):
        for j in range(4):
            assert grid[i][j] == (1 if i == j else 0)


def test_diagonal_stripes() -> None:
    grid = PatternGenerator.generate(PatternId.DIAGONAL_STRIPES, 4, 5)
    assert grid[0] == [0, 1, 2, 0]
    assert grid[1] == [1, 2, 0, 1]


def test_cross() -> None:
    grid = PatternGenerator.generate(PatternId.CROSS, 5, 7)
    assert grid[2] == [1, 1, 1, 1, 1]
    assert [row[2] for row in grid] == [1, 1, 1, 1, 1]
    assert grid[0][0] == 0 and grid[4][3] == 0


def test_spiral_rings() -> None:
    grid = PatternGenerator.generate(PatternId.SPIRAL, 5, 7)
    assert grid[2][2] == 0
    assert grid[1][1] == grid[1][3] == grid[3][2] == 1
    assert grid[0][0] == grid[4][2] == 2


def test_diamond() -> None:
    assert PatternGenerator.generate(PatternId.DIAMOND, 3, 3) == [
        [0, 1, 0],
        [1, 1, 1],
        [0, 1, 0],
    ]


def test_complex_mandala_uses_at_most_four_types() -> None:
    grid = PatternGenerator.generate(PatternId.COMPLEX_MANDALA, 5, 7)
    assert all(0 <= v < 4 for row in grid for v in row)
    # dist 0 and atan2(0, 0) == 0 at the centre
    assert grid[2][2] == 0


@pytest.mark.parametrize("unknown", ["zigzag", "", "CHECKERBOARD"])
def test_unknown_pattern_falls_back_to_checkerboard(unknown: str) -> None:
    assert PatternGenerator.generate(unknown, 4, 5) == PatternGenerator.generate(
        PatternId.CHECKERBOARD, 4, 5
    )


def test_string_ids_resolve() -> None:
    assert PatternGenerator.generate("diamond", 5, 7) == PatternGenerator.generate(
        PatternId.DIAMOND, 5, 7
    )
