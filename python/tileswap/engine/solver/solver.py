"""Hint search for the tile-swap puzzle."""

from __future__ import annotations

from tileswap.models.grid import PuzzleGrid, Swap, TilePosition


class Solver:
    """Stateless solver — all methods are static."""

    @staticmethod
    def hint(grid: PuzzleGrid) -> Swap | None:
        """Return the adjacent swap that fixes the most cells.

        Only right and down neighbours are scanned, so each pair is seen
        once in row-major order and ties go to the earliest pair. Returns
        ``None`` when the grid is solved or no swap improves it.
        """
        if grid.matches_target():
            return None

        best: Swap | None = None
        best_gain = 0
        for r in range(grid.size):
            for c in range(grid.size):
                a = TilePosition(r, c)
                for b in (TilePosition(r, c + 1), TilePosition(r + 1, c)):
                    if not grid.in_bounds(b):
                        continue
                    gain = Solver.swap_gain(grid, a, b)
                    if gain > best_gain:
                        best, best_gain = (a, b), gain
        return best

    @staticmethod
    def swap_gain(grid: PuzzleGrid, a: TilePosition, b: TilePosition) -> int:
        """Change in the number of correct cells if *a* and *b* were swapped."""
        cur, tgt = grid.current, grid.target
        va, vb = cur[a.row][a.col], cur[b.row][b.col]
        before = (va == tgt[a.row][a.col]) + (vb == tgt[b.row][b.col])
        after = (vb == tgt[a.row][a.col]) + (va == tgt[b.row][b.col])
        return after - before
