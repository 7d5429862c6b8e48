"""Core numerical primitives for pongnet."""

from . import activations, errors, types
from .network import Network

__all__ = ["Network", "activations", "errors", "types"]
