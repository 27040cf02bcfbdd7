"""Countdown — host-driven time deltas."""

from __future__ import annotations

from tileswap.models.countdown import Countdown


def test_only_runs_once_started() -> None:
    countdown = Countdown(10)
    assert countdown.tick(3) == 10
    countdown.start()
    assert countdown.tick(3) == 7


def test_variable_deltas() -> None:
    countdown = Countdown(5)
    countdown.start()
    for delta in (0.5, 1.0, 1.5):
        countdown.tick(delta)
    assert countdown.remaining == 2.0


def test_never_goes_negative_and_stops() -> None:
    countdown = Countdown(5)
    countdown.start()
    assert countdown.tick(8) == 0.0
    assert countdown.expired
    assert not countdown.running
    countdown.start()
    assert not countdown.running


def test_stop_freezes_time() -> None:
    countdown = Countdown(5)
    countdown.start()
    countdown.stop()
    countdown.tick(2)
    assert countdown.remaining == 5.0
