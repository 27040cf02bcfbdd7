from tileswap.engine.session.session import LevelSession, SessionState

__all__ = ["LevelSession", "SessionState"]
