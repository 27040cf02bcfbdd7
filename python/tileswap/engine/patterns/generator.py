"""Deterministic target-pattern generation."""

from __future__ import annotations

import math
from typing import Callable

from tileswap.models.grid import Grid
from tileswap.models.level import PatternId

# (row, col, centre, tile_types) -> tile type
CellRule = Callable[[int, int, int, int], int]


def _checkerboard(i: int, j: int, c: int, types: int) -> int:
    return (i + j) % 2


def _stripes(i: int, j: int, c: int, types: int) -> int:
    return i % min(types, 3)


def _diagonal(i: int, j: int, c: int, types: int) -> int:
    return 1 if i == j else 0


def _diagonal_stripes(i: int, j: int, c: int, types: int) -> int:
    return (i + j) % min(types, 3)


def _cross(i: int, j: int, c: int, types: int) -> int:
    return 1 if i == c or j == c else 0


def _spiral(i: int, j: int, c: int, types: int) -> int:
    return max(abs(i - c), abs(j - c)) % min(types, 3)


def _diamond(i: int, j: int, c: int, types: int) -> int:
    return 1 if abs(i - c) + abs(j - c) <= c else 0


def _complex_mandala(i: int, j: int, c: int, types: int) -> int:
    dist = math.sqrt((i - c) ** 2 + (j - c) ** 2)
    angle = math.atan2(j - c, i - c)
    return round(2 * dist + 4 * angle) % min(types, 4)


_RULES: dict[PatternId, CellRule] = {
    PatternId.CHECKERBOARD: _checkerboard,
    PatternId.STRIPES: _stripes,
    PatternId.DIAGONAL: _diagonal,
    PatternId.DIAGONAL_STRIPES: _diagonal_stripes,
    PatternId.CROSS: _cross,
    PatternId.SPIRAL: _spiral,
    PatternId.DIAMOND: _diamond,
    PatternId.COMPLEX_MANDALA: _complex_mandala,
}


class PatternGenerator:
    """Builds target grids as a pure function of their parameters."""

    @staticmethod
    def generate(pattern_id: PatternId | str, grid_size: int, tile_types: int) -> Grid:
        """Return the *grid_size* x *grid_size* target for *pattern_id*.

        Unknown ids produce a checkerboard.
        """
        if pattern_id == PatternId.CORNERS:
            return PatternGenerator._corners(grid_size)

        rule = _RULES.get(PatternGenerator.resolve(pattern_id), _checkerboard)
        c = grid_size // 2
        return [
            [rule(i, j, c, tile_types) for j in range(grid_size)]
            for i in range(grid_size)
        ]

    @staticmethod
    def resolve(pattern_id: PatternId | str) -> PatternId:
        try:
            return PatternId(pattern_id)
        except ValueError:
            return PatternId.CHECKERBOARD

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _corners(grid_size: int) -> Grid:
        last = grid_size - 1
        corners = {(0, 0), (0, last), (last, 0), (last, last)}
        return [
            [1 if (i, j) in corners else 0 for j in range(grid_size)]
            for i in range(grid_size)
        ]
