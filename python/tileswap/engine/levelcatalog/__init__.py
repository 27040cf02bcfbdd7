from tileswap.engine.levelcatalog.catalog import LevelCatalog

__all__ = ["LevelCatalog"]
