"""Hint solver — the suggested swap must make progress."""

from __future__ import annotations

import random

import pytest

from tileswap.engine.patterns import PatternGenerator
from tileswap.engine.session import LevelSession, SessionState
from tileswap.engine.solver import Solver
from tileswap.models.grid import PuzzleGrid, TilePosition
from tileswap.models.level import PatternId

P = TilePosition


def _grid() -> PuzzleGrid:
    return PuzzleGrid.solved(PatternGenerator.generate(PatternId.CHECKERBOARD, 3, 3), 3)


def test_no_hint_when_solved() -> None:
    assert Solver.hint(_grid()) is None


def test_single_swap_is_found() -> None:
    grid = _grid()
    grid.swap(P(1, 1), P(1, 2))
    hint = Solver.hint(grid)
    assert hint is not None
    assert set(hint) == {P(1, 1), P(1, 2)}
    grid.swap(*hint)
    assert grid.matches_target()


def test_no_hint_when_nothing_helps() -> None:
    grid = _grid()
    # Swapping equal tiles never changes anything.
    grid.current = [[1, 1, 1], [1, 1, 1], [1, 1, 1]]
    assert Solver.hint(grid) is None


@pytest.mark.parametrize("seed", range(5))
def test_hint_never_makes_things_worse(seed: int) -> None:
    grid = PuzzleGrid.solved(PatternGenerator.generate(PatternId.SPIRAL, 5, 7), 7)
    grid.shuffle_toward_playability(random.Random(seed), 30)
    before = grid.correct_count()
    hint = Solver.hint(grid)
    if hint is not None:
        assert Solver.swap_gain(grid, *hint) > 0
        grid.swap(*hint)
        assert grid.correct_count() > before


def test_following_hints_through_a_session() -> None:
    session = LevelSession(rng=random.Random(11))
    session.start(1)
    for _ in range(50):
        hint = Solver.hint(session.grid)
        if hint is None or session.state != SessionState.PLAYING:
            break
        before = session.grid.correct_count()
        session.tap_tile(hint[0])
        session.tap_tile(hint[1])
        assert session.grid.correct_count() > before
    if session.state == SessionState.LEVEL_COMPLETE:
        assert session.grid.matches_target()
