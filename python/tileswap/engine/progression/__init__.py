from tileswap.engine.progression.controller import (
    ProgressionController,
    ProgressionState,
)

__all__ = ["ProgressionController", "ProgressionState"]
