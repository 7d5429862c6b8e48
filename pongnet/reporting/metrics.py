"""Epoch log written next to a training run."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Dict, List, Mapping

from ..core.types import TrainingRun


class EpochLog:
    """Record each reported epoch as a JSONL line and a CSV row.

    The log is bound to a :class:`TrainingRun` when training starts, so every
    record says which phase the epoch fell in: ``verified`` is false during
    the warm-up, when nothing was checked against the grid, and ``converged``
    marks the epoch that fitted every sample.
    """

    def __init__(self, run_dir: str | Path, *, seed: int | None = None) -> None:
        self.run_dir = Path(run_dir)
        self.run_dir.mkdir(parents=True, exist_ok=True)
        self.path = self.run_dir / "metrics.jsonl"
        self.csv_path = self.run_dir / "metrics.csv"
        self.seed = seed
        self.run: TrainingRun | None = None
        self._columns: List[str] = []

    def on_train_start(self, run: TrainingRun) -> None:
        self.run = run
        self._columns = []
        self.path.write_text("")
        self.csv_path.write_text("")

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        record = self._record(epoch, metrics)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")

        new_file = not self._columns
        if new_file:
            self._columns = list(record)
        with self.csv_path.open("a", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=self._columns, extrasaction="ignore")
            if new_file:
                writer.writeheader()
            writer.writerow(record)

    __call__ = on_epoch

    def _record(self, epoch: int, metrics: Mapping[str, float]) -> Dict[str, object]:
        if self.run is None:
            raise RuntimeError("EpochLog.on_train_start must be called before on_epoch")
        record: Dict[str, object] = {
            "epoch": int(epoch),
            "seed": self.seed,
            "warmup_epochs": self.run.warmup_epochs,
            "max_epochs": self.run.max_epochs,
            "verified": int(epoch) > self.run.warmup_epochs,
            "converged": self.run.converged,
        }
        record.update({k: float(v) for k, v in sorted(metrics.items())})
        return record


__all__ = ["EpochLog"]
