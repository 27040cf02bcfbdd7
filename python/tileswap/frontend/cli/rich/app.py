"""Rich terminal frontend — coloured grids, panels and a live countdown.

A thin host over :class:`ProgressionController`: it maps keys to grid
taps, feeds the countdown from a monotonic clock and redraws after each
input or tick.
"""

from __future__ import annotations

import random
import time

import rich.box
from rich.align import Align
from rich.columns import Columns
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tileswap.engine.levelcatalog import LevelCatalog
from tileswap.engine.progression import ProgressionController, ProgressionState
from tileswap.engine.solver import Solver
from tileswap.frontend.analytics import LoggingAnalytics
from tileswap.frontend.cli.input_handler import get_key, get_key_timeout
from tileswap.models.grid import TilePosition
from tileswap.models.progress import ProgressStore

console = Console()

_TILE_STYLES: tuple[str, ...] = (
    "bold red",
    "bold blue",
    "bold green",
    "bold yellow",
    "bold magenta",
    "bold cyan",
    "bold white",
)
_TILE_GLYPH = "■"

_MOVES: dict[str, tuple[int, int]] = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds + 0.999), 60)
    return f"{m:02d}:{s:02d}"


def _stars(count: int) -> str:
    return "★" * count + "☆" * (3 - count)


# -- grid rendering -----------------------------------------------------------


def _render_grid(
    rows,
    title: str,
    cursor: TilePosition | None = None,
    selection: TilePosition | None = None,
    hint: tuple[TilePosition, TilePosition] | None = None,
) -> Table:
    table = Table(
        title=title,
        show_header=False,
        show_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in rows:
        table.add_column(width=3, justify="center")

    for r, row in enumerate(rows):
        cells: list[Text] = []
        for c, val in enumerate(row):
            pos = TilePosition(r, c)
            style = _TILE_STYLES[val % len(_TILE_STYLES)]
            if pos == selection:
                style += " reverse"
            elif hint is not None and pos in hint:
                style += " underline"
            glyph = f"[{_TILE_GLYPH}]" if pos == cursor else f" {_TILE_GLYPH} "
            cells.append(Text(glyph, style=style))
        table.add_row(*cells)
    return table


# -- screens ------------------------------------------------------------------


def _draw_menu(controller: ProgressionController) -> None:
    console.clear()
    progress = controller.progress

    levels = Table(box=rich.box.ROUNDED, border_style="dim")
    levels.add_column("Key", justify="right", style="bold cyan")
    levels.add_column("Level", justify="right")
    levels.add_column("Grid")
    levels.add_column("Pattern", style="dim")
    levels.add_column("Time", justify="right")
    levels.add_column("Best", style="yellow")
    for config in LevelCatalog.all_configs():
        key = str(config.level % 10)
        if controller.is_level_unlocked(config.level):
            best = _stars(progress.best_stars.get(config.level, 0))
        else:
            best = "[dim]locked[/dim]"
        levels.add_row(
            key,
            str(config.level),
            f"{config.grid_size}×{config.grid_size}",
            config.pattern_id.value,
            f"{config.time_limit}s",
            best,
        )

    summary = Text()
    summary.append("  Score: ", style="dim")
    summary.append(str(progress.total_score), style="bold yellow")
    summary.append("    Stars: ", style="dim")
    summary.append(str(progress.total_stars), style="bold yellow")

    help_line = Text(
        "  1-9, 0  play level    C  continue    Q  quit", style="dim"
    )

    panel = Panel(
        Group(Align.center(levels), Text(""), Align.center(summary), Align.center(help_line)),
        title="[bold]T I L E   S W A P[/bold]",
        border_style="bright_blue",
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))


def _draw_game(
    controller: ProgressionController,
    cursor: TilePosition,
    status: str = "",
    hint: tuple[TilePosition, TilePosition] | None = None,
) -> None:
    console.clear()
    session = controller.session
    assert session is not None
    grid = session.grid

    board = Columns(
        [
            _render_grid(
                grid.current, "Your grid", cursor, session.selection, hint
            ),
            _render_grid(grid.target, "Target"),
        ],
        padding=(0, 4),
    )

    stats = Text()
    stats.append("  Level: ", style="dim")
    stats.append(str(session.config.level), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(session.time_remaining), style="bold yellow")
    stats.append("    Moves: ", style="dim")
    stats.append(f"{session.moves}/{session.config.move_target}", style="bold yellow")
    stats.append("    Score: ", style="dim")
    stats.append(str(controller.progress.total_score), style="bold yellow")

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("SPACE", style="bold cyan")
    controls.append("  select/swap   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  hint   ", style="dim")
    controls.append("P", style="bold cyan")
    controls.append("  pause   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  menu", style="dim")

    paused = controller.state == ProgressionState.PAUSED
    title = "[bold yellow]PAUSED[/bold yellow]" if paused else "[bold cyan]Tile Swap[/bold cyan]"
    panel = Panel(
        Align.center(board),
        title=title,
        border_style="yellow" if paused else "bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


def _draw_outcome(controller: ProgressionController) -> None:
    console.clear()
    session = controller.session
    state = controller.state
    body = Text()

    if state == ProgressionState.LEVEL_COMPLETE and session is not None:
        result = session.result
        assert result is not None
        body.append("\n  ★ LEVEL COMPLETE ★\n\n", style="bold green")
        body.append(f"  {_stars(result.stars)}\n", style="bold yellow")
        body.append(f"  +{result.points} points in {session.moves} moves\n\n")
        body.append("  C  next level    Q  menu\n", style="dim")
        border = "bold green"
    elif state == ProgressionState.GAME_OVER:
        body.append("\n  TIME'S UP\n\n", style="bold red")
        body.append("  R  try again    Q  menu\n", style="dim")
        border = "bold red"
    else:
        body.append(f"\n  Level {controller.prompt_level} is locked.\n\n", style="bold yellow")
        body.append("  Watch a reward to unlock it.\n\n")
        body.append("  U  unlock    Q  menu\n", style="dim")
        border = "yellow"

    console.print()
    console.print(Align.center(Panel(body, border_style=border, padding=(1, 4))))


# -- loops --------------------------------------------------------------------


def _play(controller: ProgressionController, tick: float) -> None:
    """Drive the active level until it leaves the playing/paused states."""
    session = controller.session
    assert session is not None
    cursor = TilePosition(0, 0)
    status = ""
    hint: tuple[TilePosition, TilePosition] | None = None
    last = time.monotonic()

    while controller.state in (ProgressionState.PLAYING, ProgressionState.PAUSED):
        _draw_game(controller, cursor, status, hint)
        key = get_key_timeout(tick)
        now = time.monotonic()
        controller.tick(now - last)
        last = now
        if key is None:
            continue

        status = ""
        if key in _MOVES:
            dr, dc = _MOVES[key]
            size = session.grid.size
            cursor = TilePosition(
                min(size - 1, max(0, cursor.row + dr)),
                min(size - 1, max(0, cursor.col + dc)),
            )
        elif key == "tap":
            controller.tap_tile(cursor)
            hint = None
        elif key == "hint":
            hint = Solver.hint(session.grid)
            if hint is None:
                status = "[yellow]No single swap helps here.[/yellow]"
            else:
                cursor = hint[0]
        elif key == "pause":
            if controller.state == ProgressionState.PAUSED:
                controller.resume()
            else:
                controller.pause()
        elif key == "restart":
            controller.restart_level()
            session = controller.session
            assert session is not None
            cursor, hint = TilePosition(0, 0), None
        elif key == "quit":
            controller.return_to_menu()


def _outcome(controller: ProgressionController) -> None:
    """Handle level-complete, game-over and unlock screens."""
    _draw_outcome(controller)
    key = get_key()
    state = controller.state

    if key == "quit":
        controller.return_to_menu()
    elif state == ProgressionState.LEVEL_COMPLETE and key in ("continue", "tap"):
        controller.next_level()
    elif state == ProgressionState.GAME_OVER and key in ("restart", "tap"):
        controller.restart_level()
    elif state == ProgressionState.UNLOCK_PROMPT and key == "unlock":
        controller.unlock_granted()


def _menu_loop(controller: ProgressionController, tick: float, start_level: int | None) -> None:
    if start_level is not None:
        controller.start_level(start_level)

    while True:
        state = controller.state
        if state in (ProgressionState.PLAYING, ProgressionState.PAUSED):
            _play(controller, tick)
            continue
        if state != ProgressionState.MENU:
            _outcome(controller)
            continue

        _draw_menu(controller)
        key = get_key()
        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        if key == "continue":
            controller.start_level(controller.continue_level())
        elif key.isdigit():
            controller.start_level(int(key) or 10)


# -- public entry point -------------------------------------------------------


def run(
    store: ProgressStore,
    seed: int | None = None,
    level: int | None = None,
    tick: float = 0.5,
) -> None:
    """Launch the Rich terminal game."""
    controller = ProgressionController(
        progress=store.load(),
        store=store,
        rng=random.Random(seed),
    )
    analytics = LoggingAnalytics()
    analytics.attach(controller.events)
    try:
        _menu_loop(controller, tick, level)
    finally:
        analytics.detach()
        store.save(controller.progress)
