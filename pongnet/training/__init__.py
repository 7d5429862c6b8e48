"""Training loop, metrics and pipelines for pongnet."""

from .pipelines import load_preset, presets, run_pipeline
from .trainer import Trainer, train

__all__ = ["Trainer", "load_preset", "presets", "run_pipeline", "train"]
