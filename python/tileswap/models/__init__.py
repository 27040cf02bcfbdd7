from tileswap.models.countdown import Countdown
from tileswap.models.grid import Grid, Pattern, PuzzleGrid, Swap, TilePosition
from tileswap.models.level import LevelConfig, PatternId
from tileswap.models.progress import PlayerProgress, ProgressStore

__all__ = [
    "Countdown",
    "Grid",
    "LevelConfig",
    "Pattern",
    "PatternId",
    "PlayerProgress",
    "ProgressStore",
    "PuzzleGrid",
    "Swap",
    "TilePosition",
]
