"""Player progress and its JSON persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

FREE_LEVELS = 3


@dataclass
class PlayerProgress:
    """Campaign progress that survives level transitions and restarts."""

    current_level: int = 1
    total_score: int = 0
    total_stars: int = 0
    highest_unlocked_level: int = FREE_LEVELS
    best_stars: dict[int, int] = field(default_factory=dict)

    def record_stars(self, level: int, stars: int) -> None:
        self.best_stars[level] = max(self.best_stars.get(level, 0), stars)

    def to_dict(self) -> dict:
        return {
            "current_level": self.current_level,
            "total_score": self.total_score,
            "total_stars": self.total_stars,
            "highest_unlocked_level": self.highest_unlocked_level,
            "best_stars": {str(k): v for k, v in sorted(self.best_stars.items())},
        }

    @classmethod
    def from_dict(cls, data: dict) -> PlayerProgress:
        return cls(
            current_level=max(1, int(data.get("current_level", 1))),
            total_score=int(data.get("total_score", 0)),
            total_stars=int(data.get("total_stars", 0)),
            highest_unlocked_level=max(
                FREE_LEVELS, int(data.get("highest_unlocked_level", FREE_LEVELS))
            ),
            best_stars={
                int(k): int(v) for k, v in data.get("best_stars", {}).items()
            },
        )


class ProgressStore:
    """Loads and saves :class:`PlayerProgress` from a JSON file."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath

    # -- persistence ----------------------------------------------------------

    def load(self) -> PlayerProgress:
        """Return the stored progress, or defaults if absent or unreadable."""
        if not self.filepath.exists():
            return PlayerProgress()
        try:
            data = json.loads(self.filepath.read_text(encoding="utf-8"))
            return PlayerProgress.from_dict(data)
        except (json.JSONDecodeError, OSError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Could not load progress from %s: %s", self.filepath, e)
            return PlayerProgress()

    def save(self, progress: PlayerProgress) -> None:
        try:
            self.filepath.parent.mkdir(parents=True, exist_ok=True)
            self.filepath.write_text(
                json.dumps(progress.to_dict(), indent=2) + "\n", encoding="utf-8"
            )
        except OSError as e:
            logger.warning("Could not save progress to %s: %s", self.filepath, e)

    def reset(self) -> PlayerProgress:
        progress = PlayerProgress()
        self.save(progress)
        return progress
