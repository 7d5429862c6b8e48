"""Feed-forward network trained by per-sample back-propagation."""

from __future__ import annotations

from typing import Mapping, Sequence

import numpy as np

from . import activations
from .errors import DimensionMismatch
from .types import Array, ModelDescription


class Network:
    """Fully connected network with a bounded activation on every layer.

    ``weights[l]`` has shape ``(sizes[l], sizes[l + 1])`` and ``biases[l]``
    has shape ``(sizes[l + 1],)``. Parameters change only through
    :meth:`backpropagate` or a whole-model :meth:`load_state_dict`.
    """

    def __init__(
        self,
        layer_sizes: Sequence[int],
        activation: str = "tanh",
        learning_rate: float = 0.01,
        seed: int | None = None,
        init_scale: float = 0.5,
    ) -> None:
        sizes = tuple(int(s) for s in layer_sizes)
        if len(sizes) < 2:
            raise ValueError(f"layer_sizes needs at least two entries, got {list(sizes)}")
        if any(s <= 0 for s in sizes):
            raise ValueError(f"layer sizes must be positive, got {list(sizes)}")
        if learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {learning_rate}")
        self._sizes = sizes
        self._activation = activations.get(activation)
        self.learning_rate = float(learning_rate)
        self.init_scale = float(init_scale)
        self.weights: list[Array] = []
        self.biases: list[Array] = []
        self.reset(seed)

    @property
    def layer_sizes(self) -> tuple[int, ...]:
        return self._sizes

    @property
    def input_width(self) -> int:
        return self._sizes[0]

    @property
    def output_width(self) -> int:
        return self._sizes[-1]

    @property
    def activation(self) -> str:
        return self._activation.name

    def describe(self) -> ModelDescription:
        return ModelDescription(layer_sizes=self._sizes, activation=self.activation)

    def reset(self, seed: int | None = None) -> None:
        rng = np.random.default_rng(seed)
        scale = self.init_scale
        weights: list[Array] = []
        biases: list[Array] = []
        for in_dim, out_dim in zip(self._sizes[:-1], self._sizes[1:]):
            weights.append(rng.uniform(-scale, scale, size=(in_dim, out_dim)))
            biases.append(rng.uniform(-scale, scale, size=out_dim))
        self.weights = weights
        self.biases = biases

    def forward(self, inputs: Array) -> Array:
        """Evaluate the network on one input vector or a stack of row vectors."""

        x = np.asarray(inputs, dtype=np.float64)
        if x.ndim not in (1, 2) or x.shape[-1] != self.input_width:
            raise DimensionMismatch("input width", self.input_width, x.shape)
        fn = self._activation.fn
        for W, b in zip(self.weights, self.biases):
            x = fn(x @ W + b)
        return x

    def backpropagate(self, inputs: Array, target: Array) -> None:
        """Run one gradient-descent step on a single labelled sample."""

        x = np.asarray(inputs, dtype=np.float64)
        y = np.asarray(target, dtype=np.float64)
        if x.shape != (self.input_width,):
            raise DimensionMismatch("input width", (self.input_width,), x.shape)
        if y.shape != (self.output_width,):
            raise DimensionMismatch("target width", (self.output_width,), y.shape)

        fn = self._activation.fn
        deriv = self._activation.deriv
        layer_inputs = [x]
        for W, b in zip(self.weights, self.biases):
            layer_inputs.append(fn(layer_inputs[-1] @ W + b))

        # deltas are taken against the pre-update weights
        last = len(self.weights) - 1
        deltas: list[Array] = [np.empty(0)] * (last + 1)
        deltas[last] = (y - layer_inputs[-1]) * deriv(layer_inputs[-1])
        for idx in reversed(range(last)):
            deltas[idx] = (self.weights[idx + 1] @ deltas[idx + 1]) * deriv(layer_inputs[idx + 1])

        lr = self.learning_rate
        for idx, delta in enumerate(deltas):
            self.weights[idx] += lr * np.outer(layer_inputs[idx], delta)
            self.biases[idx] += lr * delta

    def state_dict(self) -> dict[str, Array]:
        state: dict[str, Array] = {}
        for idx, (W, b) in enumerate(zip(self.weights, self.biases)):
            state[f"W{idx}"] = W.copy()
            state[f"b{idx}"] = b.copy()
        return state

    def load_state_dict(self, state: Mapping[str, Array]) -> None:
        """Replace every parameter from ``state``, or none of them."""

        weights: list[Array] = []
        biases: list[Array] = []
        for idx, (in_dim, out_dim) in enumerate(zip(self._sizes[:-1], self._sizes[1:])):
            for key, shape, bucket in (
                (f"W{idx}", (in_dim, out_dim), weights),
                (f"b{idx}", (out_dim,), biases),
            ):
                if key not in state:
                    raise KeyError(f"Missing parameter {key} in state dict")
                value = np.array(state[key], dtype=np.float64)
                if value.shape != shape:
                    raise DimensionMismatch(key, shape, value.shape)
                bucket.append(value)
        self.weights = weights
        self.biases = biases

    def parameter_count(self) -> int:
        return int(sum(W.size + b.size for W, b in zip(self.weights, self.biases)))

    def __repr__(self) -> str:
        return (
            f"Network(layer_sizes={list(self._sizes)}, activation={self.activation!r}, "
            f"learning_rate={self.learning_rate})"
        )


__all__ = ["Network"]
