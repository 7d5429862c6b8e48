"""pongnet public API."""

from .control import PaddleAgent, render_radar
from .core import activations, types  # noqa: F401
from .core.errors import DimensionMismatch, EmptyDataset, ModelLoadFailure, NonConvergence
from .core.network import Network
from .data import decode_position, enumerate_samples, one_hot_cell, pattern_from_frame
from .storage import ModelStore
from .training import Trainer, load_preset, presets, run_pipeline, train

__all__ = [
    "DimensionMismatch",
    "EmptyDataset",
    "ModelLoadFailure",
    "ModelStore",
    "Network",
    "NonConvergence",
    "PaddleAgent",
    "Trainer",
    "activations",
    "decode_position",
    "enumerate_samples",
    "load_preset",
    "one_hot_cell",
    "pattern_from_frame",
    "presets",
    "render_radar",
    "run_pipeline",
    "train",
    "types",
]
