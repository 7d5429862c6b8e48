"""Convergence-checked online training over an exhaustive dataset."""

from __future__ import annotations

import logging
import warnings
from typing import Mapping, Sequence

import numpy as np

from ..core.errors import DimensionMismatch, EmptyDataset, NonConvergence
from ..core.network import Network
from ..core.types import Array, Sample, TrainingRun
from ..data.grid import GRID_WIDTH
from .metrics import DEFAULT_METRICS, compute_metrics, rounded_hits

logger = logging.getLogger(__name__)


class Trainer:
    """Back-propagate every sample once per epoch until all of them round correctly.

    Verifying the whole dataset costs about as much as another forward sweep,
    so it is skipped until ``epoch > warmup_epochs``.
    """

    def __init__(
        self,
        callbacks: Sequence[object] | None = None,
        eval_every: int = 100,
        metric_names: Sequence[str] = DEFAULT_METRICS,
    ) -> None:
        self.callbacks = list(callbacks or [])
        self.eval_every = max(1, int(eval_every))
        self.metric_names = list(metric_names)

    def train(
        self,
        network: Network,
        dataset: Sequence[Sample],
        max_epochs: int,
        warmup_epochs: int,
        *,
        resolution: int = GRID_WIDTH,
    ) -> TrainingRun:
        if not dataset:
            raise EmptyDataset("cannot train on an empty dataset")
        if max_epochs < 1:
            raise ValueError(f"max_epochs must be at least 1, got {max_epochs}")
        if warmup_epochs < 0:
            raise ValueError(f"warmup_epochs must be non-negative, got {warmup_epochs}")

        inputs, targets, labels = self._stack(network, dataset)
        run = TrainingRun(max_epochs=int(max_epochs), warmup_epochs=int(warmup_epochs))
        logger.info(
            "Training %s on %d samples (max_epochs=%d, warmup_epochs=%d)",
            network,
            len(labels),
            max_epochs,
            warmup_epochs,
        )
        for callback in self.callbacks:
            if hasattr(callback, "on_train_start"):
                callback.on_train_start(run)  # type: ignore[attr-defined]

        while run.epoch < max_epochs:
            for x, y in zip(inputs, targets):
                network.backpropagate(x, y)
            run.epoch += 1

            verify = run.epoch > warmup_epochs
            final = run.epoch == max_epochs
            if not (verify or final or run.epoch % self.eval_every == 0):
                continue

            predictions = network.forward(inputs)
            if verify and bool(np.all(rounded_hits(predictions, labels, resolution))):
                run.converged = True
            if run.converged or final or run.epoch % self.eval_every == 0:
                run.metrics = dict(
                    compute_metrics(
                        self.metric_names, predictions, targets, labels, resolution=resolution
                    )
                )
                self._emit_epoch(run.epoch, run.metrics)
            if run.converged:
                break

        if run.converged:
            logger.info("Converged after %d epochs", run.epoch)
        else:
            logger.warning("No convergence after %d epochs: %s", run.epoch, run.metrics)
            warnings.warn(
                f"training stopped at the {max_epochs} epoch cap without fitting every sample",
                NonConvergence,
                stacklevel=2,
            )
        return run

    # ------------------------------------------------------------------
    # Internal helpers

    @staticmethod
    def _stack(network: Network, dataset: Sequence[Sample]) -> tuple[Array, Array, Array]:
        in_shape = (network.input_width,)
        out_shape = (network.output_width,)
        for sample in dataset:
            if np.shape(sample.inputs) != in_shape:
                raise DimensionMismatch("sample input width", in_shape, np.shape(sample.inputs))
            if np.shape(sample.target) != out_shape:
                raise DimensionMismatch("sample target width", out_shape, np.shape(sample.target))
        inputs = np.stack([np.asarray(s.inputs, dtype=np.float64) for s in dataset])
        targets = np.stack([np.asarray(s.target, dtype=np.float64) for s in dataset])
        labels = np.array([s.label for s in dataset], dtype=np.int64)
        return inputs, targets, labels

    def _emit_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        logger.info(
            "epoch %d: %s", epoch, ", ".join(f"{k}={v:.6f}" for k, v in metrics.items())
        )
        for callback in self.callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(epoch, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(epoch, metrics)


def train(
    network: Network,
    dataset: Sequence[Sample],
    max_epochs: int,
    warmup_epochs: int,
    *,
    resolution: int = GRID_WIDTH,
) -> TrainingRun:
    """Train ``network`` with a callback-free :class:`Trainer`."""

    return Trainer().train(
        network, dataset, max_epochs, warmup_epochs, resolution=resolution
    )


__all__ = ["Trainer", "train"]
