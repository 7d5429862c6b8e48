"""Reporting utilities for pongnet."""

from .metrics import EpochLog
from .plots import PlotAdapter

__all__ = ["EpochLog", "PlotAdapter"]
