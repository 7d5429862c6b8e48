"""ASCII rendering of what the agent sees, for debugging."""

from __future__ import annotations

import numpy as np

from ..core.types import Array
from ..data.grid import GRID_WIDTH


def render_radar(pattern: Array, left: int, right: int, width: int = GRID_WIDTH) -> str:
    """Draw ``O`` for lit cells, ``=`` for the paddle on the bottom row, ``.`` otherwise.

    The paddle covers columns ``left`` up to but excluding ``right``.
    """

    cells = np.asarray(pattern).reshape(-1, width)
    bottom = cells.shape[0] - 1
    rows = []
    for y, row in enumerate(cells):
        line = []
        for x, value in enumerate(row):
            if value == 1:
                line.append("O")
            elif y == bottom and left <= x < right:
                line.append("=")
            else:
                line.append(".")
        rows.append("".join(line))
    return "\n".join(rows) + "\n"


__all__ = ["render_radar"]
