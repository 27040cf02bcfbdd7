"""Progression controller — campaign flow and the unlock gate."""

from __future__ import annotations

import random

import pytest

from tileswap.engine.progression import ProgressionController, ProgressionState
from tileswap.errors import ConfigurationError, InvalidStateTransition
from tileswap.events import UnlockGranted, UnlockPromptShown
from tileswap.models.progress import PlayerProgress

S = ProgressionState


class RecordingStore:
    """Persistence stand-in that keeps a snapshot of every save."""

    def __init__(self) -> None:
        self.saved: list[dict] = []

    def save(self, progress: PlayerProgress) -> None:
        self.saved.append(progress.to_dict())


# -- helpers ------------------------------------------------------------------


def _controller(highest: int = 3, store: RecordingStore | None = None, **kwargs) -> ProgressionController:
    return ProgressionController(
        progress=PlayerProgress(highest_unlocked_level=highest),
        store=store,
        rng=random.Random(5),
        **kwargs,
    )


def _solve(controller: ProgressionController) -> None:
    session = controller.session
    assert session is not None
    for a, b in reversed(session.scramble):
        if controller.state != S.PLAYING:
            break
        controller.tap_tile(a)
        controller.tap_tile(b)
    assert controller.state == S.LEVEL_COMPLETE


def _complete(controller: ProgressionController, level: int) -> None:
    controller.start_level(level)
    _solve(controller)


# -- basic flow ---------------------------------------------------------------


def test_starts_in_menu() -> None:
    controller = _controller()
    assert controller.state == S.MENU
    assert controller.session is None


def test_start_level_plays_a_fresh_session() -> None:
    controller = _controller()
    controller.start_level(1)
    assert controller.state == S.PLAYING
    assert controller.current_level == 1
    assert controller.session is not None
    assert controller.session.config.level == 1


def test_completion_accumulates_progress() -> None:
    store = RecordingStore()
    controller = _controller(store=store)
    _complete(controller, 1)

    result = controller.session.result
    assert controller.progress.total_score == result.points
    assert controller.progress.total_stars == result.stars
    assert controller.progress.best_stars == {1: result.stars}
    assert store.saved[-1]["total_score"] == result.points


def test_failure_is_game_over_then_restart() -> None:
    controller = _controller()
    controller.start_level(2)
    first = controller.session
    controller.tick(55)
    assert controller.state == S.GAME_OVER
    assert controller.progress.total_score == 0

    controller.restart_level()
    assert controller.state == S.PLAYING
    assert controller.current_level == 2
    assert controller.session is not first
    assert controller.session.time_remaining == 55


def test_pause_and_resume() -> None:
    controller = _controller()
    controller.start_level(1)
    controller.pause()
    assert controller.state == S.PAUSED
    controller.tick(100)
    assert controller.session.time_remaining == 60
    controller.resume()
    assert controller.state == S.PLAYING


def test_restart_from_pause() -> None:
    controller = _controller()
    controller.start_level(1)
    controller.tick(10)
    controller.pause()
    controller.restart_level()
    assert controller.state == S.PLAYING
    assert controller.session.time_remaining == 60


def test_next_level_within_free_levels() -> None:
    controller = _controller()
    _complete(controller, 1)
    controller.next_level()
    assert controller.state == S.PLAYING
    assert controller.current_level == 2


def test_scores_add_up_across_levels() -> None:
    controller = _controller()
    _complete(controller, 1)
    first = controller.session.result.points
    controller.next_level()
    _solve(controller)
    second = controller.session.result.points
    assert controller.progress.total_score == first + second


# -- unlock gate --------------------------------------------------------------


def test_level_after_three_needs_unlock() -> None:
    controller = _controller(highest=3)
    _complete(controller, 3)
    controller.next_level()

    assert controller.state == S.UNLOCK_PROMPT
    assert controller.prompt_level == 4
    assert UnlockPromptShown(level=4) in list(controller.events.drain())


def test_unlock_granted_starts_next_level() -> None:
    store = RecordingStore()
    controller = _controller(highest=3, store=store)
    _complete(controller, 3)
    controller.next_level()
    controller.unlock_granted()

    assert controller.state == S.PLAYING
    assert controller.current_level == 4
    assert controller.progress.highest_unlocked_level == 4
    assert store.saved[-1]["highest_unlocked_level"] == 4
    assert UnlockGranted(level=4) in list(controller.events.drain())


def test_unlocked_level_skips_prompt() -> None:
    controller = _controller(highest=4)
    _complete(controller, 3)
    controller.next_level()
    assert controller.state == S.PLAYING
    assert controller.current_level == 4


def test_starting_a_locked_level_prompts_for_the_first_locked_one() -> None:
    controller = _controller(highest=3)
    controller.start_level(6)
    assert controller.state == S.UNLOCK_PROMPT
    assert controller.prompt_level == 4
    controller.unlock_granted()
    assert controller.current_level == 4
    assert controller.progress.highest_unlocked_level == 4


def test_levels_unlock_one_at_a_time() -> None:
    controller = _controller(highest=3)
    controller.start_level(7)
    controller.unlock_granted()
    controller.return_to_menu()
    controller.start_level(5)

    assert controller.state == S.UNLOCK_PROMPT
    assert controller.prompt_level == 5
    assert controller.progress.highest_unlocked_level == 4
    granted = [e for e in controller.events.drain() if isinstance(e, UnlockGranted)]
    assert granted == [UnlockGranted(level=4)]


@pytest.mark.parametrize("highest, first_locked", [(3, 4), (4, 5), (9, 10)])
def test_first_locked_level(highest: int, first_locked: int) -> None:
    assert _controller(highest=highest).first_locked_level() == first_locked


@pytest.mark.parametrize("level, unlocked", [(1, True), (3, True), (4, False), (10, False)])
def test_free_levels(level: int, unlocked: bool) -> None:
    assert _controller(highest=3).is_level_unlocked(level) is unlocked


def test_last_level_returns_to_menu() -> None:
    controller = _controller(highest=10)
    _complete(controller, 10)
    controller.next_level()
    assert controller.state == S.MENU
    assert controller.session is None


# -- ignored and invalid calls ------------------------------------------------


def test_out_of_state_calls_are_ignored() -> None:
    controller = _controller()
    controller.next_level()
    controller.unlock_granted()
    controller.tick(1.0)
    controller.tap_tile((0, 0))
    controller.resume()
    controller.restart_level()
    assert controller.state == S.MENU


def test_start_level_ignored_while_playing() -> None:
    controller = _controller()
    controller.start_level(1)
    session = controller.session
    controller.start_level(2)
    assert controller.session is session


def test_strict_controller_raises() -> None:
    controller = _controller(strict=True)
    with pytest.raises(InvalidStateTransition):
        controller.next_level()


def test_configuration_error_leaves_state_unchanged() -> None:
    controller = _controller()
    with pytest.raises(ConfigurationError):
        controller.start_level(0)
    assert controller.state == S.MENU
    assert controller.session is None


def test_return_to_menu_abandons_level() -> None:
    controller = _controller()
    controller.start_level(1)
    controller.return_to_menu()
    assert controller.state == S.MENU
    assert controller.session is None
    controller.start_level(1)
    assert controller.state == S.PLAYING


# -- continuing the campaign --------------------------------------------------


def test_continue_offers_next_level_after_completion() -> None:
    controller = _controller()
    _complete(controller, 2)
    controller.return_to_menu()
    assert controller.continue_level() == 3


def test_continue_replays_a_failed_level() -> None:
    controller = _controller()
    controller.start_level(2)
    controller.tick(55)
    controller.return_to_menu()
    assert controller.continue_level() == 2


def test_continue_stays_behind_the_unlock_gate() -> None:
    controller = _controller(highest=3)
    _complete(controller, 3)
    controller.return_to_menu()
    assert controller.continue_level() == 3


def test_continue_on_fresh_progress_starts_level_one() -> None:
    assert _controller().continue_level() == 1


def test_continue_after_the_last_level() -> None:
    progress = PlayerProgress(current_level=10, highest_unlocked_level=10, best_stars={10: 2})
    assert ProgressionController(progress=progress).continue_level() == 10
