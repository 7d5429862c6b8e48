"""Metric helpers for the exhaustive training loop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping

import numpy as np

from ..core.types import Array

DEFAULT_METRICS = ("mse", "mae", "accuracy")


@dataclass(frozen=True)
class MetricResult:
    name: str
    value: float


def rounded_hits(predictions: Array, labels: Array, resolution: int) -> Array:
    """Boolean mask of samples whose rounded first output equals the label."""

    decoded = np.rint(predictions[:, 0] * resolution).astype(np.int64)
    return decoded == labels


def compute_metric(
    name: str,
    predictions: Array,
    targets: Array,
    labels: Array,
    *,
    resolution: int,
) -> MetricResult:
    key = name.lower()
    if key == "mse":
        value = float(np.mean((predictions - targets) ** 2))
    elif key == "mae":
        value = float(np.mean(np.abs(predictions - targets)))
    elif key == "accuracy":
        value = float(np.mean(rounded_hits(predictions, labels, resolution)))
    else:
        raise KeyError(f"Unknown metric: {name}")
    return MetricResult(name=key, value=value)


def compute_metrics(
    names: Iterable[str],
    predictions: Array,
    targets: Array,
    labels: Array,
    *,
    resolution: int,
) -> Mapping[str, float]:
    results: Dict[str, float] = {}
    for name in names:
        metric = compute_metric(name, predictions, targets, labels, resolution=resolution)
        results[metric.name] = metric.value
    return results


__all__ = ["DEFAULT_METRICS", "MetricResult", "compute_metrics", "rounded_hits"]
