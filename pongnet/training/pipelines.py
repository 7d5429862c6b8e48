"""Pipeline assembly: load a stored model, or train one and persist it."""

from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Dict, Mapping

from ..core.network import Network
from ..core.types import ModelDescription, PipelineResult
from ..data.grid import GRID_HEIGHT, GRID_WIDTH, enumerate_samples
from ..reporting.metrics import EpochLog
from ..reporting.plots import PlotAdapter
from ..storage.model_store import ModelStore
from .trainer import Trainer

logger = logging.getLogger(__name__)

_PRESETS: Dict[str, Mapping[str, object]] = {
    # The reference tuning fits all 1024 cells after roughly 11,500 epochs.
    "reference": {
        "model": {
            "layers": [GRID_WIDTH * GRID_HEIGHT, 1],
            "activation": "tanh",
            "learning_rate": 0.01,
            "init_scale": 0.5,
            "seed": 0,
        },
        "data": {"width": GRID_WIDTH, "height": GRID_HEIGHT},
        "train": {
            "max_epochs": 20000,
            "warmup_epochs": 11000,
            "eval_every": 500,
            "run_dir": "runs/reference",
            "enable_plots": False,
        },
        "store": {"model_dir": "models", "enabled": True},
    },
    "fast": {
        "model": {
            "layers": [GRID_WIDTH * GRID_HEIGHT, 1],
            "activation": "tanh",
            "learning_rate": 0.5,
            "init_scale": 0.5,
            "seed": 0,
        },
        "data": {"width": GRID_WIDTH, "height": GRID_HEIGHT},
        "train": {
            "max_epochs": 200000,
            "warmup_epochs": 0,
            "eval_every": 50,
            "run_dir": "runs/fast",
            "enable_plots": False,
        },
        "store": {"model_dir": "models", "enabled": True},
    },
}


def presets() -> Mapping[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> Dict[str, object]:
    try:
        return deepcopy(dict(_PRESETS[name]))
    except KeyError as exc:
        available = ", ".join(sorted(_PRESETS))
        raise KeyError(f"Unknown preset {name!r}. Available presets: {available}") from exc


def build_network(model_cfg: Mapping[str, object]) -> Network:
    seed = model_cfg.get("seed")
    return Network(
        layer_sizes=[int(size) for size in model_cfg["layers"]],  # type: ignore[union-attr]
        activation=str(model_cfg.get("activation", "tanh")),
        learning_rate=float(model_cfg.get("learning_rate", 0.01)),
        seed=int(seed) if seed is not None else None,
        init_scale=float(model_cfg.get("init_scale", 0.5)),
    )


def run_pipeline(config: Mapping[str, object], *, retrain: bool = False) -> PipelineResult:
    model_cfg = dict(config["model"])  # type: ignore[arg-type]
    data_cfg = dict(config.get("data", {}))  # type: ignore[arg-type]
    train_cfg = dict(config.get("train", {}))  # type: ignore[arg-type]
    store_cfg = dict(config.get("store", {}))  # type: ignore[arg-type]

    network = build_network(model_cfg)
    store = ModelStore(store_cfg.get("model_dir", "models"))
    use_store = bool(store_cfg.get("enabled", True))

    if use_store and not retrain and store.load(network):
        return PipelineResult(
            network=network,
            run=None,
            loaded=True,
            model_path=store.path_for(network.layer_sizes),
        )

    width = int(data_cfg.get("width", GRID_WIDTH))
    height = int(data_cfg.get("height", GRID_HEIGHT))
    dataset = enumerate_samples(width, height)
    max_epochs = int(train_cfg.get("max_epochs", 20000))
    warmup_epochs = int(train_cfg.get("warmup_epochs", 0))

    run_dir = Path(str(train_cfg.get("run_dir", "runs/default")))
    run_dir.mkdir(parents=True, exist_ok=True)
    _print_startup_summary(
        grid=(width, height),
        model=network.describe(),
        stored=use_store and store.exists(network),
        learning_rate=network.learning_rate,
        max_epochs=max_epochs,
        warmup_epochs=warmup_epochs,
        param_count=network.parameter_count(),
    )

    epoch_log = EpochLog(run_dir, seed=model_cfg.get("seed"))  # type: ignore[arg-type]
    plots = PlotAdapter(run_dir, enable_plots=bool(train_cfg.get("enable_plots", False)))
    trainer = Trainer(
        callbacks=[epoch_log, plots],
        eval_every=int(train_cfg.get("eval_every", 100)),
    )
    try:
        run = trainer.train(network, dataset, max_epochs, warmup_epochs, resolution=width)
    finally:
        plots.close()

    model_path = None
    if run.converged and use_store:
        model_path = store.save(network)
    elif not run.converged:
        logger.warning("Keeping the unconverged model in memory only")

    (run_dir / "config.json").write_text(json.dumps(_safe_config(config), indent=2))

    return PipelineResult(
        network=network,
        run=run,
        loaded=False,
        model_path=model_path,
        metrics_path=epoch_log.path,
    )


def _safe_config(config: Mapping[str, object]) -> Mapping[str, object]:
    return json.loads(json.dumps(config))


def _print_startup_summary(
    *,
    grid: tuple[int, int],
    model: ModelDescription,
    stored: bool,
    learning_rate: float,
    max_epochs: int,
    warmup_epochs: int,
    param_count: int,
) -> None:
    print("=== pongnet training ===")
    print(f"Grid          : {grid[0]}x{grid[1]}")
    print(f"Layers        : {list(model.layer_sizes)}")
    print(f"Activation    : {model.activation}")
    print(f"Learning rate : {learning_rate}")
    print(f"Epoch cap     : {max_epochs}")
    print(f"Warm-up       : {warmup_epochs}")
    print(f"Parameters    : {param_count}")
    print(f"Stored model  : {'replaced on convergence' if stored else 'none'}")
    print("========================")


__all__ = ["build_network", "load_preset", "presets", "run_pipeline"]
