from tileswap.engine.patterns.generator import PatternGenerator

__all__ = ["PatternGenerator"]
