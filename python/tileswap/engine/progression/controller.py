"""Campaign state machine: level lifecycle, progression and unlock gate."""

from __future__ import annotations

import logging
import random
from enum import StrEnum
from typing import Protocol

from tileswap.engine.levelcatalog import LevelCatalog
from tileswap.engine.session import LevelSession, SessionState
from tileswap.errors import InvalidStateTransition
from tileswap.events import EventChannel, UnlockGranted, UnlockPromptShown
from tileswap.models.grid import TilePosition
from tileswap.models.progress import PlayerProgress

logger = logging.getLogger(__name__)


class ProgressionState(StrEnum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    LEVEL_COMPLETE = "level_complete"
    UNLOCK_PROMPT = "unlock_prompt"


class ProgressSink(Protocol):
    def save(self, progress: PlayerProgress) -> None: ...


_CAN_START = (
    ProgressionState.MENU,
    ProgressionState.LEVEL_COMPLETE,
    ProgressionState.GAME_OVER,
    ProgressionState.UNLOCK_PROMPT,
)


class ProgressionController:
    """Top-level game flow.

    Owns the player's progress and exactly one active :class:`LevelSession`.
    Input and clock calls are forwarded to the session; its terminal states
    are folded back into the campaign state after every call.
    """

    def __init__(
        self,
        progress: PlayerProgress | None = None,
        store: ProgressSink | None = None,
        rng: random.Random | None = None,
        catalog: type[LevelCatalog] = LevelCatalog,
        events: EventChannel | None = None,
        strict: bool = False,
    ) -> None:
        self.progress = progress if progress is not None else PlayerProgress()
        self.events = events if events is not None else EventChannel()
        self._store = store
        self._rng = rng if rng is not None else random.Random()
        self._catalog = catalog
        self._strict = strict

        self._state = ProgressionState.MENU
        self._session: LevelSession | None = None
        self._level: int = self.progress.current_level
        self._prompt_level: int | None = None

    # -- queries --------------------------------------------------------------

    @property
    def state(self) -> ProgressionState:
        return self._state

    @property
    def session(self) -> LevelSession | None:
        return self._session

    @property
    def current_level(self) -> int:
        return self._level

    @property
    def prompt_level(self) -> int | None:
        """Level waiting behind the unlock gate, if a prompt is showing."""
        return self._prompt_level

    def is_level_unlocked(self, level: int) -> bool:
        return level <= max(self._catalog.FREE_LEVELS, self.progress.highest_unlocked_level)

    def first_locked_level(self) -> int:
        return max(self._catalog.FREE_LEVELS, self.progress.highest_unlocked_level) + 1

    def continue_level(self) -> int:
        """Level to offer when resuming the campaign from the menu.

        The level after the last one played once that one has been
        completed and the next is unlocked; otherwise the last one again.
        """
        level = self.progress.current_level
        upcoming = level + 1
        if (
            level in self.progress.best_stars
            and upcoming <= self._catalog.MAX_LEVEL
            and self.is_level_unlocked(upcoming)
        ):
            return upcoming
        return level

    # -- level lifecycle ------------------------------------------------------

    def start_level(self, level: int) -> None:
        """Start *level*, or show the unlock prompt if it is still locked.

        Levels are unlocked one at a time: a locked request prompts for the
        first locked level, never for one further ahead.
        """
        if not self._allowed("start_level", *_CAN_START):
            return
        if not self.is_level_unlocked(level):
            self._show_unlock_prompt(self.first_locked_level())
            return
        self._begin(level)

    def restart_level(self) -> None:
        if not self._allowed(
            "restart_level",
            ProgressionState.GAME_OVER,
            ProgressionState.PAUSED,
            ProgressionState.PLAYING,
        ):
            return
        self._begin(self._level)

    def next_level(self) -> None:
        if not self._allowed("next_level", ProgressionState.LEVEL_COMPLETE):
            return
        if self._level >= self._catalog.MAX_LEVEL:
            logger.info("Campaign complete with %d points", self.progress.total_score)
            self._session = None
            self._state = ProgressionState.MENU
            return
        upcoming = self._level + 1
        if self._level >= self._catalog.FREE_LEVELS and not self.is_level_unlocked(upcoming):
            self._show_unlock_prompt(upcoming)
            return
        self._begin(upcoming)

    def unlock_granted(self) -> None:
        """Called by the reward collaborator once the player earned access."""
        if not self._allowed("unlock_granted", ProgressionState.UNLOCK_PROMPT):
            return
        level = self._prompt_level if self._prompt_level is not None else self._level + 1
        self.progress.highest_unlocked_level = max(
            self.progress.highest_unlocked_level, level
        )
        self._save()
        logger.info("Level %d unlocked", level)
        self.events.emit(UnlockGranted(level=level))
        self._begin(level)

    def return_to_menu(self) -> None:
        if self._state == ProgressionState.MENU:
            return
        self._session = None
        self._prompt_level = None
        self._state = ProgressionState.MENU

    # -- forwarded session operations -----------------------------------------

    def tick(self, delta: float) -> None:
        if not self._allowed("tick", ProgressionState.PLAYING):
            return
        self._active().tick(delta)
        self._sync()

    def tap_tile(self, pos: TilePosition | tuple[int, int]) -> None:
        if not self._allowed("tap_tile", ProgressionState.PLAYING):
            return
        self._active().tap_tile(pos)
        self._sync()

    def pause(self) -> None:
        if not self._allowed("pause", ProgressionState.PLAYING):
            return
        self._active().pause()
        self._state = ProgressionState.PAUSED

    def resume(self) -> None:
        if not self._allowed("resume", ProgressionState.PAUSED):
            return
        self._active().resume()
        self._state = ProgressionState.PLAYING

    # -- helpers --------------------------------------------------------------

    def _begin(self, level: int) -> None:
        session = LevelSession(
            rng=self._rng, catalog=self._catalog, events=self.events
        )
        # Raises ConfigurationError before any controller state changes.
        session.start(level)
        self._session = session
        self._level = level
        self._prompt_level = None
        self._state = ProgressionState.PLAYING

    def _sync(self) -> None:
        session = self._active()
        if session.state == SessionState.LEVEL_COMPLETE:
            result = session.result
            assert result is not None
            self.progress.current_level = self._level
            self.progress.total_score += result.points
            self.progress.total_stars += result.stars
            self.progress.record_stars(self._level, result.stars)
            self._save()
            self._state = ProgressionState.LEVEL_COMPLETE
        elif session.state == SessionState.FAILED:
            self.progress.current_level = self._level
            self._save()
            self._state = ProgressionState.GAME_OVER

    def _show_unlock_prompt(self, level: int) -> None:
        self._prompt_level = level
        self._state = ProgressionState.UNLOCK_PROMPT
        logger.info("Level %d is locked; showing unlock prompt", level)
        self.events.emit(UnlockPromptShown(level=level))

    def _active(self) -> LevelSession:
        if self._session is None:
            raise InvalidStateTransition("No level is being played.")
        return self._session

    def _save(self) -> None:
        if self._store is not None:
            self._store.save(self.progress)

    def _allowed(self, operation: str, *states: ProgressionState) -> bool:
        if self._state in states:
            return True
        if self._strict:
            raise InvalidStateTransition(
                f"{operation}() is not allowed while {self._state}."
            )
        logger.debug("Ignoring %s() while %s", operation, self._state)
        return False
