"""Countdown timer driven by externally supplied time deltas."""

from __future__ import annotations


class Countdown:
    """Remaining-time tracker for a level.

    The engine never reads a wall clock: the host advances the countdown
    by calling :meth:`tick` with the elapsed seconds.
    """

    def __init__(self, seconds: float) -> None:
        self._remaining: float = float(seconds)
        self._running: bool = False

    @property
    def remaining(self) -> float:
        return self._remaining

    @property
    def running(self) -> bool:
        return self._running

    @property
    def expired(self) -> bool:
        return self._remaining <= 0.0

    def start(self) -> None:
        if not self.expired:
            self._running = True

    def stop(self) -> None:
        self._running = False

    def tick(self, delta: float) -> float:
        """Advance by *delta* seconds while running; return what is left."""
        if self._running and delta > 0:
            self._remaining = max(0.0, self._remaining - delta)
            if self._remaining == 0.0:
                self._running = False
        return self._remaining
