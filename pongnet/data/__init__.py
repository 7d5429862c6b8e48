"""Dataset helpers for pongnet."""

from .grid import (
    GRID_HEIGHT,
    GRID_WIDTH,
    decode_position,
    enumerate_samples,
    one_hot_cell,
    pattern_from_frame,
)

__all__ = [
    "GRID_HEIGHT",
    "GRID_WIDTH",
    "decode_position",
    "enumerate_samples",
    "one_hot_cell",
    "pattern_from_frame",
]
