"""Headless-safe plotting adapters."""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple


class PlotAdapter:
    """Collect the training error per reported epoch and optionally plot it."""

    def __init__(self, run_dir: str | Path, enable_plots: bool = False, metric: str = "mse"):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self.metric = metric
        self._history: List[Tuple[int, float]] = []
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    @property
    def plot_path(self) -> Path:
        return self.run_dir / f"{self.metric}.png"

    def on_epoch(self, epoch: int, metrics):
        if not self.enable_plots or self.metric not in metrics:
            return
        self._history.append((epoch, float(metrics[self.metric])))

    def close(self) -> None:
        if not self.enable_plots or not self._history:
            return
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt  # imported lazily for headless safety

        epochs, values = zip(*self._history)
        fig, ax = plt.subplots()
        ax.plot(epochs, values)
        ax.set_yscale("log")
        ax.set_xlabel("Epoch")
        ax.set_ylabel(self.metric.upper())
        ax.set_title("Training Curve")
        fig.savefig(self.plot_path)
        plt.close(fig)

    __call__ = on_epoch
