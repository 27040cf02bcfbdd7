"""Tile Swap puzzle.

Usage::

    tileswap                    # menu, progress in ~/.tileswap
    tileswap -l 3 --seed 7      # jump straight into level 3
    tileswap --progress         # print saved progress and exit
    tileswap --reset            # forget all progress
"""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from tileswap.engine.levelcatalog import LevelCatalog
from tileswap.models.progress import ProgressStore

DATA_DIR = Path.home() / ".tileswap"
PROGRESS_FILE = "progress.json"

logger = logging.getLogger("tileswap")


class LogLevel(StrEnum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"


# -- helpers ------------------------------------------------------------------


def _configure_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def _print_progress(store: ProgressStore) -> None:
    progress = store.load()
    console = Console()

    table = Table(title="Tile Swap progress", title_style="bold cyan")
    table.add_column("Level", justify="right")
    table.add_column("Best stars", style="yellow")
    for config in LevelCatalog.all_configs():
        stars = progress.best_stars.get(config.level)
        if config.level > progress.highest_unlocked_level:
            shown = "[dim]locked[/dim]"
        elif stars is None:
            shown = "[dim]-[/dim]"
        else:
            shown = "★" * stars
        table.add_row(str(config.level), shown)

    console.print(table)
    console.print(
        f"  Current level: {progress.current_level}   "
        f"Score: {progress.total_score}   Stars: {progress.total_stars}"
    )


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    level: Optional[int] = typer.Option(
        None, "-l", "--level",
        min=1, max=LevelCatalog.MAX_LEVEL,
        help="Start this level immediately instead of showing the menu.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for the scramble, for reproducible puzzles.",
    ),
    data_dir: Path = typer.Option(
        DATA_DIR, "--data-dir",
        help="Directory holding progress.json.",
    ),
    tick: float = typer.Option(
        0.5, "--tick",
        min=0.05, max=1.0,
        help="Seconds between clock ticks.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        help="Logging verbosity.",
    ),
    progress: bool = typer.Option(
        False, "--progress",
        help="Show saved progress and exit.",
    ),
    reset: bool = typer.Option(
        False, "--reset",
        help="Clear saved progress and exit.",
    ),
) -> None:
    """Tile Swap puzzle."""
    _configure_logging(log_level)
    store = ProgressStore(data_dir / PROGRESS_FILE)

    if reset:
        store.reset()
        logger.info("Progress reset at %s", store.filepath)
        return

    if progress:
        _print_progress(store)
        return

    from tileswap.frontend.cli.rich.app import run

    run(store, seed=seed, level=level, tick=tick)


if __name__ == "__main__":
    app()
