"""Tile Swap — rearrange a grid of typed tiles to match a target pattern."""

__version__ = "1.0.0"
