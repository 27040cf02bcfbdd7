from tileswap.engine.scoring.scoring import ScoreResult, ScoringModel

__all__ = ["ScoreResult", "ScoringModel"]
