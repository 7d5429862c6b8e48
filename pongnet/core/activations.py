"""Activation utilities for pongnet.

Derivatives are expressed in terms of the activation *output* so the
backward pass can reuse the values cached by the forward pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

import numpy as np

from .types import Array


def tanh(x: Array) -> Array:
    return np.tanh(x)


def tanh_deriv(y: Array) -> Array:
    """Derivative of ``tanh`` given ``y = tanh(x)``."""

    return 1.0 - y**2


def sigmoid(x: Array) -> Array:
    return 1.0 / (1.0 + np.exp(-x))


def sigmoid_deriv(y: Array) -> Array:
    """Derivative of the logistic function given ``y = sigmoid(x)``."""

    return y * (1.0 - y)


@dataclass(frozen=True)
class Activation:
    name: str
    fn: Callable[[Array], Array]
    deriv: Callable[[Array], Array]


_REGISTRY: Dict[str, Activation] = {
    "tanh": Activation("tanh", tanh, tanh_deriv),
    "sigmoid": Activation("sigmoid", sigmoid, sigmoid_deriv),
}


def get(name: str) -> Activation:
    try:
        return _REGISTRY[name]
    except KeyError as exc:
        available = ", ".join(sorted(_REGISTRY))
        raise KeyError(f"Unknown activation {name!r}. Available: {available}") from exc


def names() -> list[str]:
    return sorted(_REGISTRY)


__all__ = ["Activation", "get", "names", "sigmoid", "sigmoid_deriv", "tanh", "tanh_deriv"]
