"""Analytics sink that records engine events through logging."""

from __future__ import annotations

import logging

from tileswap.events import Event, EventChannel

logger = logging.getLogger(__name__)


class LoggingAnalytics:
    """Subscribes to an :class:`EventChannel` and logs every event."""

    def __init__(self, game_id: str = "tileswap", app_version: str = "1.0.0") -> None:
        self.game_id = game_id
        self.app_version = app_version
        self.count = 0
        self._unsubscribe = None

    def attach(self, channel: EventChannel) -> None:
        self._unsubscribe = channel.subscribe(self.track)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def track(self, event: Event) -> None:
        self.count += 1
        logger.info(
            "analytics %s %s (game=%s version=%s)",
            event.name,
            event.payload(),
            self.game_id,
            self.app_version,
        )
