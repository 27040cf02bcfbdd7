"""Score and star rating for a completed level."""

from __future__ import annotations

from dataclasses import dataclass

BASE_POINTS = 100
TIME_BONUS_PER_SECOND = 10
MOVE_BONUS_PER_SAVED_MOVE = 5
# Star thresholds, in tenths of the time limit.
THREE_STAR_TENTHS = 7
TWO_STAR_TENTHS = 4


@dataclass(frozen=True)
class ScoreResult:
    points: int
    stars: int


class ScoringModel:
    """Stateless scoring — all methods are static."""

    @staticmethod
    def score(
        time_remaining: float, time_limit: float, moves: int, move_target: int
    ) -> ScoreResult:
        """Return points and a 1-3 star rating.

        Stars compare the remaining time against fractions of the level's
        full time limit, with strict ``>`` at each threshold.
        """
        points = (
            BASE_POINTS
            + round(time_remaining * TIME_BONUS_PER_SECOND)
            + max(0, (move_target - moves) * MOVE_BONUS_PER_SAVED_MOVE)
        )
        return ScoreResult(
            points=points,
            stars=ScoringModel.stars(time_remaining, time_limit),
        )

    @staticmethod
    def stars(time_remaining: float, time_limit: float) -> int:
        scaled = time_remaining * 10
        if scaled > time_limit * THREE_STAR_TENTHS:
            return 3
        if scaled > time_limit * TWO_STAR_TENTHS:
            return 2
        return 1
