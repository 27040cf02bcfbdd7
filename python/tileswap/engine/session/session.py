"""One play-through of a level: grid, countdown, moves and selection."""

from __future__ import annotations

import logging
import random
from enum import StrEnum

from tileswap.engine.levelcatalog import LevelCatalog
from tileswap.engine.patterns import PatternGenerator
from tileswap.engine.scoring import ScoreResult, ScoringModel
from tileswap.errors import ConfigurationError, InvalidStateTransition
from tileswap.events import (
    EventChannel,
    LevelCompleted,
    LevelFailed,
    LevelStarted,
    TileSwapped,
)
from tileswap.models.countdown import Countdown
from tileswap.models.grid import PuzzleGrid, Swap, TilePosition
from tileswap.models.level import LevelConfig

logger = logging.getLogger(__name__)


class SessionState(StrEnum):
    LOADING = "loading"
    PLAYING = "playing"
    PAUSED = "paused"
    LEVEL_COMPLETE = "level_complete"
    FAILED = "failed"


TERMINAL_STATES = frozenset({SessionState.LEVEL_COMPLETE, SessionState.FAILED})
MAX_SCRAMBLE_ATTEMPTS = 100


class LevelSession:
    """Orchestrates a single level.

    The host serialises every call. Operations requested in a state that
    does not allow them are ignored, unless the session was built with
    ``strict=True``, in which case they raise ``InvalidStateTransition``.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        catalog: type[LevelCatalog] = LevelCatalog,
        events: EventChannel | None = None,
        strict: bool = False,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._catalog = catalog
        self.events = events if events is not None else EventChannel()
        self._strict = strict

        self._state = SessionState.LOADING
        self._config: LevelConfig | None = None
        self._grid: PuzzleGrid | None = None
        self._countdown = Countdown(0)
        self._scramble: list[Swap] = []
        self._selection: TilePosition | None = None
        self._moves: int = 0
        self._result: ScoreResult | None = None

    # -- lifecycle ------------------------------------------------------------

    def start(self, level: int) -> None:
        """Build *level* from scratch and begin the countdown.

        Anything left from a previous level is discarded. Raises
        ``ConfigurationError`` (leaving the session failed) if the level
        cannot be built.
        """
        self._state = SessionState.LOADING
        self._selection = None
        self._moves = 0
        self._result = None
        self._countdown.stop()

        try:
            config = self._catalog.get_config(level)
            target = PatternGenerator.generate(
                config.pattern_id, config.grid_size, config.tile_types
            )
        except ConfigurationError:
            self._state = SessionState.FAILED
            logger.error("Level %s could not be configured", level)
            raise

        grid = PuzzleGrid.solved(target, config.tile_types)
        # A scramble can cancel itself out; never hand the player a solved grid.
        for _ in range(MAX_SCRAMBLE_ATTEMPTS):
            self._scramble = grid.shuffle_toward_playability(
                self._rng, config.shuffle_complexity
            )
            if not grid.matches_target():
                break
        self._config = config
        self._grid = grid
        self._countdown = Countdown(config.time_limit)
        self._countdown.start()
        self._state = SessionState.PLAYING

        logger.info(
            "Level %d started: %dx%d, %d tile types, %ds",
            config.level,
            config.grid_size,
            config.grid_size,
            config.tile_types,
            config.time_limit,
        )
        self.events.emit(
            LevelStarted(
                level=config.level,
                grid_size=config.grid_size,
                tile_types=config.tile_types,
                time_limit=config.time_limit,
            )
        )

    def tick(self, delta: float) -> None:
        """Advance the countdown by *delta* seconds."""
        if not self._allowed("tick", SessionState.PLAYING):
            return
        if self._countdown.tick(delta) > 0.0:
            return

        self._countdown.stop()
        self._selection = None
        self._state = SessionState.FAILED
        logger.info("Level %d failed: time is up", self.config.level)
        self.events.emit(LevelFailed(level=self.config.level, time_remaining=0.0))

    def pause(self) -> None:
        if not self._allowed("pause", SessionState.PLAYING):
            return
        self._countdown.stop()
        self._state = SessionState.PAUSED

    def resume(self) -> None:
        if not self._allowed("resume", SessionState.PAUSED):
            return
        self._countdown.start()
        self._state = SessionState.PLAYING

    # -- input ----------------------------------------------------------------

    def tap_tile(self, pos: TilePosition | tuple[int, int]) -> None:
        """Apply the select / deselect / swap protocol to a tapped cell."""
        if not self._allowed("tap_tile", SessionState.PLAYING):
            return
        pos = TilePosition(*pos)
        grid = self.grid
        if not grid.in_bounds(pos):
            logger.debug("Ignoring tap outside the grid at %s", pos)
            return

        selected = self._selection
        if selected is None:
            self._selection = pos
        elif selected == pos:
            self._selection = None
        elif grid.are_adjacent(selected, pos):
            grid.swap(selected, pos)
            self._moves += 1
            self._selection = None
            self.events.emit(
                TileSwapped(
                    level=self.config.level,
                    first=selected,
                    second=pos,
                    moves=self._moves,
                )
            )
            if grid.matches_target():
                self._complete()
        else:
            self._selection = pos

    # -- queries --------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_over(self) -> bool:
        return self._state in TERMINAL_STATES

    @property
    def config(self) -> LevelConfig:
        if self._config is None:
            raise InvalidStateTransition("Session has not been started.")
        return self._config

    @property
    def grid(self) -> PuzzleGrid:
        if self._grid is None:
            raise InvalidStateTransition("Session has not been started.")
        return self._grid

    @property
    def selection(self) -> TilePosition | None:
        return self._selection

    @property
    def moves(self) -> int:
        return self._moves

    @property
    def time_remaining(self) -> float:
        return self._countdown.remaining

    @property
    def result(self) -> ScoreResult | None:
        return self._result

    @property
    def scramble(self) -> tuple[Swap, ...]:
        """The swaps that turned the target into the starting grid."""
        return tuple(self._scramble)

    # -- helpers --------------------------------------------------------------

    def _complete(self) -> None:
        self._countdown.stop()
        config = self.config
        remaining = self._countdown.remaining
        self._result = ScoringModel.score(
            remaining, config.time_limit, self._moves, config.move_target
        )
        self._state = SessionState.LEVEL_COMPLETE
        logger.info(
            "Level %d complete in %d moves: %d points, %d stars",
            config.level,
            self._moves,
            self._result.points,
            self._result.stars,
        )
        self.events.emit(
            LevelCompleted(
                level=config.level,
                time_remaining=remaining,
                stars_earned=self._result.stars,
                points=self._result.points,
            )
        )

    def _allowed(self, operation: str, *states: SessionState) -> bool:
        if self._state in states:
            return True
        if self._strict:
            raise InvalidStateTransition(
                f"{operation}() is not allowed while {self._state}."
            )
        logger.debug("Ignoring %s() while %s", operation, self._state)
        return False
