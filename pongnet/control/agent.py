"""Paddle controller that consumes a trained network's output.

The network only answers "where should the paddle be"; moving towards that
position at a bounded speed and keeping the paddle on the board happens here.
"""

from __future__ import annotations

import numpy as np

from ..core.network import Network
from ..core.types import Array
from ..data.grid import GRID_WIDTH, decode_position


class PaddleAgent:
    """Moves a paddle on the bottom row towards the network's predicted column."""

    def __init__(
        self,
        network: Network,
        resolution: int = GRID_WIDTH,
        paddle_width: int = 5,
        max_step: float = 3.0,
        center: float = 16.0,
    ) -> None:
        self.network = network
        self.resolution = int(resolution)
        self.paddle_width = int(paddle_width)
        self.max_step = float(max_step)
        self.center = float(center)
        self.desired = self.center
        self.pattern: Array = np.zeros(network.input_width, dtype=np.float64)
        self.output: Array = np.zeros(network.output_width, dtype=np.float64)

    @property
    def half_width(self) -> int:
        return self.paddle_width // 2

    @property
    def left(self) -> int:
        return int(round(self.center - self.half_width))

    @property
    def right(self) -> int:
        return int(round(self.center + 1 + self.half_width))

    def move(self, pattern: Array) -> float:
        """Read one captured pattern and step the paddle; returns the new centre."""

        self.output = self.network.forward(pattern)
        self.pattern = np.asarray(pattern, dtype=np.float64)
        self.desired = float(decode_position(self.output[0], self.resolution))
        self.center = float(
            np.clip(self.desired, self.center - self.max_step, self.center + self.max_step)
        )
        if self.left < 0:
            self.center = float(self.half_width)
        if self.right > self.resolution - 1:
            self.center = float(self.resolution - 1 - self.half_width)
        return self.center


__all__ = ["PaddleAgent"]
