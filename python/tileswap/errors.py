"""Exception types raised by the tile-swap engine."""

from __future__ import annotations


class TileSwapError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(TileSwapError):
    """A level configuration or pattern could not be produced.

    Fatal for the requested level: retrying with the same level number
    will fail the same way.
    """


class InvalidSwap(TileSwapError):
    """Two positions cannot be swapped (equal, not adjacent or off-grid)."""


class InvalidStateTransition(TileSwapError):
    """An operation was requested in a state that does not allow it."""
