"""Level number to configuration lookup."""

from __future__ import annotations

from dataclasses import replace

from tileswap.errors import ConfigurationError
from tileswap.models.level import LevelConfig, PatternId
from tileswap.models.progress import FREE_LEVELS

# Patterns in order of increasing visual complexity, one per level.
_PATTERNS: tuple[PatternId, ...] = (
    PatternId.CHECKERBOARD,
    PatternId.STRIPES,
    PatternId.CORNERS,
    PatternId.DIAGONAL,
    PatternId.DIAGONAL_STRIPES,
    PatternId.CROSS,
    PatternId.SPIRAL,
    PatternId.DIAMOND,
    PatternId.COMPLEX_MANDALA,
    PatternId.COMPLEX_MANDALA,
)


class LevelCatalog:
    """Stateless difficulty curve — all methods are class-level."""

    MAX_LEVEL = 10
    FREE_LEVELS = FREE_LEVELS

    @classmethod
    def get_config(cls, level: int) -> LevelConfig:
        """Return the configuration for *level*.

        Levels past ``MAX_LEVEL`` reuse the last level's shape. Raises
        ``ConfigurationError`` for level numbers below 1.
        """
        if level < 1:
            raise ConfigurationError(f"No configuration for level {level}.")
        if level > cls.MAX_LEVEL:
            return replace(cls._build(cls.MAX_LEVEL), level=level)
        return cls._build(level)

    @classmethod
    def all_configs(cls) -> list[LevelConfig]:
        return [cls._build(n) for n in range(1, cls.MAX_LEVEL + 1)]

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _build(level: int) -> LevelConfig:
        if level <= 3:
            grid_size = 3
            tile_types = 3 if level < 3 else 4
            time_limit = 65 - 5 * level
            shuffle = 5 + 5 * level
        elif level <= 5:
            grid_size = 4
            tile_types = 5
            time_limit = 45
            shuffle = 25
        else:
            grid_size = 5
            tile_types = min(7, 3 + level - 1)
            time_limit = max(30, 70 - 4 * level)
            shuffle = 35 + 5 * (level - 6)
        return LevelConfig(
            level=level,
            grid_size=grid_size,
            tile_types=tile_types,
            time_limit=time_limit,
            pattern_id=_PATTERNS[level - 1],
            shuffle_complexity=shuffle,
            move_target=shuffle,
        )
