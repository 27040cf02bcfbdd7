"""Grid model for the tile-swap puzzle."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import NamedTuple

from tileswap.errors import InvalidSwap

Grid = list[list[int]]
Pattern = tuple[tuple[int, ...], ...]


class TilePosition(NamedTuple):
    row: int
    col: int


Swap = tuple[TilePosition, TilePosition]


@dataclass
class PuzzleGrid:
    """The player's grid and the pattern it has to match.

    ``current`` is mutated by swaps; ``target`` never changes once built.
    Every cell holds a tile type in ``[0, tile_types)``.
    """

    size: int
    tile_types: int
    target: Pattern
    current: Grid

    # -- construction helpers -------------------------------------------------

    @classmethod
    def solved(cls, target: Grid | Pattern, tile_types: int) -> PuzzleGrid:
        """Create a grid whose current tiles already equal *target*."""
        frozen = tuple(tuple(row) for row in target)
        return cls(
            size=len(frozen),
            tile_types=tile_types,
            target=frozen,
            current=[list(row) for row in frozen],
        )

    def randomize(self, rng: random.Random) -> None:
        """Fill ``current`` with uniform random tile types.

        The result ignores ``target`` and is not guaranteed to be solvable
        with the tile counts available.
        """
        self.current = [
            [rng.randrange(self.tile_types) for _ in range(self.size)]
            for _ in range(self.size)
        ]

    def shuffle_toward_playability(
        self, rng: random.Random, shuffle_complexity: int
    ) -> list[Swap]:
        """Reset to the target, then apply *shuffle_complexity* random swaps.

        Each swap picks a random cell and one of its neighbours, so the
        scramble is always undone by replaying the returned swaps in
        reverse order.
        """
        self.current = [list(row) for row in self.target]
        performed: list[Swap] = []
        cells = [TilePosition(r, c) for r in range(self.size) for c in range(self.size)]
        for _ in range(shuffle_complexity):
            a = rng.choice(cells)
            b = rng.choice(self.neighbors(a))
            self.swap(a, b)
            performed.append((a, b))
        return performed

    # -- queries --------------------------------------------------------------

    def get_tile(self, row: int, col: int) -> int:
        return self.current[row][col]

    def in_bounds(self, pos: TilePosition) -> bool:
        return 0 <= pos.row < self.size and 0 <= pos.col < self.size

    @staticmethod
    def are_adjacent(a: TilePosition, b: TilePosition) -> bool:
        """Orthogonal neighbours only: Manhattan distance exactly 1."""
        return abs(a.row - b.row) + abs(a.col - b.col) == 1

    def neighbors(self, pos: TilePosition) -> list[TilePosition]:
        found: list[TilePosition] = []
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            candidate = TilePosition(pos.row + dr, pos.col + dc)
            if self.in_bounds(candidate):
                found.append(candidate)
        return found

    def matches_target(self) -> bool:
        for r in range(self.size):
            for c in range(self.size):
                if self.current[r][c] != self.target[r][c]:
                    return False
        return True

    def is_tile_correct(self, row: int, col: int) -> bool:
        return self.current[row][col] == self.target[row][col]

    def correct_count(self) -> int:
        return sum(
            1
            for r in range(self.size)
            for c in range(self.size)
            if self.is_tile_correct(r, c)
        )

    # -- mutation -------------------------------------------------------------

    def swap(self, a: TilePosition, b: TilePosition) -> None:
        """Exchange the tiles at *a* and *b*.

        Raises ``InvalidSwap`` if the positions are equal, not adjacent or
        off the grid; the grid is left untouched in that case.
        """
        a, b = TilePosition(*a), TilePosition(*b)
        if not (self.in_bounds(a) and self.in_bounds(b)):
            raise InvalidSwap(f"Position out of bounds: {a} <-> {b}.")
        if a == b:
            raise InvalidSwap(f"Cannot swap {a} with itself.")
        if not self.are_adjacent(a, b):
            raise InvalidSwap(f"{a} and {b} are not adjacent.")
        self.current[a.row][a.col], self.current[b.row][b.col] = (
            self.current[b.row][b.col],
            self.current[a.row][a.col],
        )

    def copy(self) -> PuzzleGrid:
        return PuzzleGrid(
            size=self.size,
            tile_types=self.tile_types,
            target=self.target,
            current=[row[:] for row in self.current],
        )
