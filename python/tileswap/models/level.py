"""Level configuration model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from tileswap.errors import ConfigurationError


class PatternId(StrEnum):
    CHECKERBOARD = "checkerboard"
    STRIPES = "stripes"
    CORNERS = "corners"
    DIAGONAL = "diagonal"
    DIAGONAL_STRIPES = "diagonal-stripes"
    CROSS = "cross"
    SPIRAL = "spiral"
    DIAMOND = "diamond"
    COMPLEX_MANDALA = "complex-mandala"


MIN_GRID_SIZE = 3
MAX_GRID_SIZE = 5
MIN_TILE_TYPES = 3
MAX_TILE_TYPES = 7


@dataclass(frozen=True)
class LevelConfig:
    """Immutable description of one level.

    ``time_limit`` is in seconds. ``move_target`` is the move count at or
    below which the efficiency bonus is earned.
    """

    level: int
    grid_size: int
    tile_types: int
    time_limit: int
    pattern_id: PatternId
    shuffle_complexity: int
    move_target: int

    def __post_init__(self) -> None:
        if self.level < 1:
            raise ConfigurationError(f"Level must be >= 1, got {self.level}.")
        if not MIN_GRID_SIZE <= self.grid_size <= MAX_GRID_SIZE:
            raise ConfigurationError(
                f"Grid size {self.grid_size} outside "
                f"{MIN_GRID_SIZE}..{MAX_GRID_SIZE} (level {self.level})."
            )
        if not MIN_TILE_TYPES <= self.tile_types <= MAX_TILE_TYPES:
            raise ConfigurationError(
                f"Tile types {self.tile_types} outside "
                f"{MIN_TILE_TYPES}..{MAX_TILE_TYPES} (level {self.level})."
            )
        if self.time_limit <= 0:
            raise ConfigurationError(
                f"Time limit must be positive (level {self.level})."
            )
        if self.shuffle_complexity < 0 or self.move_target < 0:
            raise ConfigurationError(
                f"Shuffle complexity and move target must be >= 0 "
                f"(level {self.level})."
            )
