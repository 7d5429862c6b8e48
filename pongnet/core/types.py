"""Core typing contracts for pongnet."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Tuple

import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    from .network import Network

Array = np.ndarray


@dataclass(frozen=True)
class Sample:
    """A single labelled training pattern."""

    inputs: Array
    target: Array
    label: int


@dataclass(frozen=True)
class ModelDescription:
    """Description of the feed-forward network architecture."""

    layer_sizes: Tuple[int, ...]
    activation: str


@dataclass
class TrainingRun:
    """Outcome of :meth:`pongnet.training.trainer.Trainer.train`.

    ``epoch`` counts completed passes over the dataset. ``converged`` is only
    set once a verification pass found every rounded prediction equal to its
    label.
    """

    max_epochs: int
    warmup_epochs: int
    epoch: int = 0
    converged: bool = False
    metrics: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class PipelineResult:
    """Summary returned by :func:`pongnet.training.pipelines.run_pipeline`."""

    network: "Network"
    run: TrainingRun | None
    loaded: bool
    model_path: Path | None = None
    metrics_path: Path | None = None

    @property
    def converged(self) -> bool:
        return self.loaded or (self.run is not None and self.run.converged)
