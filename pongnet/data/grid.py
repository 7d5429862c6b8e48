"""Exhaustive one-hot dataset over the playfield grid.

Every cell of the ``width`` x ``height`` grid is one sample: the input is a
one-hot vector with the active cell at ``x + y * width`` and the target is the
horizontal coordinate ``x / width``. The set is closed by construction, so it
doubles as the verification set.
"""

from __future__ import annotations

from typing import List

import numpy as np

from ..core.types import Array, Sample

GRID_WIDTH = 32
GRID_HEIGHT = 32


def one_hot_cell(x: int, y: int, width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> Array:
    """Return the flattened pattern with only cell ``(x, y)`` lit."""

    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f"cell ({x}, {y}) lies outside a {width}x{height} grid")
    pattern = np.zeros(width * height, dtype=np.float64)
    pattern[x + y * width] = 1.0
    return pattern


def enumerate_samples(width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> List[Sample]:
    """Enumerate all ``width * height`` samples, column by column."""

    samples: List[Sample] = []
    for x in range(width):
        target = np.array([x / width], dtype=np.float64)
        for y in range(height):
            samples.append(Sample(inputs=one_hot_cell(x, y, width, height), target=target, label=x))
    return samples


def decode_position(value: float, resolution: int = GRID_WIDTH) -> int:
    """Map a network output in ``[0, 1]`` back to a grid column."""

    return int(np.rint(float(value) * resolution))


def pattern_from_frame(frame: Array) -> Array:
    """Threshold a captured raster into the flat pattern the network reads.

    ``frame`` is ``(height, width)`` or ``(height, width, channels)``; only the
    first channel is inspected and any non-zero value counts as lit.
    """

    raster = np.asarray(frame)
    if raster.ndim == 3:
        raster = raster[..., 0]
    if raster.ndim != 2:
        raise ValueError(f"expected a 2-D or 3-D frame, got shape {raster.shape}")
    return (raster != 0).astype(np.float64).reshape(-1)


__all__ = [
    "GRID_HEIGHT",
    "GRID_WIDTH",
    "decode_position",
    "enumerate_samples",
    "one_hot_cell",
    "pattern_from_frame",
]
