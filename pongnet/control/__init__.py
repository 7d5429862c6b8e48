"""Control-loop consumers of a trained network."""

from .agent import PaddleAgent
from .radar import render_radar

__all__ = ["PaddleAgent", "render_radar"]
