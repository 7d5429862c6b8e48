"""Model persistence for pongnet."""

from .model_store import ModelStore

__all__ = ["ModelStore"]
