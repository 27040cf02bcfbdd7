"""Outbound notifications emitted at engine transition points.

Collaborators (renderers, analytics, audio) either subscribe a callback
or pull pending events with :meth:`EventChannel.drain`. Delivery is
best effort: a failing subscriber never affects engine state.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import asdict, dataclass
from typing import Callable, ClassVar, Iterator

from tileswap.models.grid import TilePosition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    name: ClassVar[str] = "event"

    def payload(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class LevelStarted(Event):
    name: ClassVar[str] = "level_start"

    level: int
    grid_size: int
    tile_types: int
    time_limit: int


@dataclass(frozen=True)
class TileSwapped(Event):
    name: ClassVar[str] = "tile_swap"

    level: int
    first: TilePosition
    second: TilePosition
    moves: int


@dataclass(frozen=True)
class LevelCompleted(Event):
    name: ClassVar[str] = "level_complete"

    level: int
    time_remaining: float
    stars_earned: int
    points: int


@dataclass(frozen=True)
class LevelFailed(Event):
    name: ClassVar[str] = "level_fail"

    level: int
    time_remaining: float


@dataclass(frozen=True)
class UnlockPromptShown(Event):
    name: ClassVar[str] = "unlock_prompt_shown"

    level: int


@dataclass(frozen=True)
class UnlockGranted(Event):
    name: ClassVar[str] = "rewarded_ad_completed"

    level: int


Subscriber = Callable[[Event], None]


class EventChannel:
    """Ordered event queue with push-style subscribers."""

    def __init__(self, max_pending: int = 1024) -> None:
        self._subscribers: list[Subscriber] = []
        self._pending: deque[Event] = deque(maxlen=max_pending)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback*; return a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, event: Event) -> None:
        self._pending.append(event)
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception("Subscriber %r failed on %s", callback, event.name)

    def drain(self) -> Iterator[Event]:
        """Yield pending events oldest first, removing each as it is read."""
        while self._pending:
            yield self._pending.popleft()

    def __len__(self) -> int:
        return len(self._pending)
