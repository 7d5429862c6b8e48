"""Command line entry point for training and probing the pongnet model."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Iterable

from pongnet.control import PaddleAgent, render_radar
from pongnet.core import activations
from pongnet.data import decode_position, one_hot_cell
from pongnet.training import pipelines


def _format_result(result) -> str:
    payload = {
        "loaded": result.loaded,
        "converged": result.converged,
        "epochs": result.run.epoch if result.run is not None else 0,
        "model": str(result.model_path) if result.model_path else None,
    }
    if result.metrics_path is not None:
        payload["metrics"] = str(result.metrics_path)
    if result.run is not None and result.run.metrics:
        payload["final"] = result.run.metrics
    return json.dumps(payload, sort_keys=True)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="reference",
        help="Preset configuration to execute",
    )
    parser.add_argument(
        "--config", type=Path, help="Optional JSON/YAML config override"
    )
    parser.add_argument(
        "--activation",
        choices=activations.names(),
        help="Override the model activation",
    )
    parser.add_argument("--model-dir", type=Path, help="Directory holding stored models")
    parser.add_argument("--run-dir", type=Path, help="Directory for training metrics")
    parser.add_argument(
        "--retrain",
        action="store_true",
        help="Ignore any stored model and train from scratch",
    )
    parser.add_argument(
        "--enable-plots", action="store_true", help="Plot the training curve"
    )
    parser.add_argument(
        "--probe",
        nargs=2,
        type=int,
        action="append",
        metavar=("X", "Y"),
        help="Show the model's answer for the ball at cell X,Y (repeatable)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when training does not converge",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def _load_override(path: Path) -> dict:
    text = path.read_text()
    if path.suffix in {".yml", ".yaml"}:
        import yaml

        return yaml.safe_load(text) or {}
    return json.loads(text)


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge(dict(base[key]), value)
        else:
            base[key] = value
    return base


def _probe(result, cells: Iterable[tuple[int, int]], width: int, height: int) -> None:
    for x, y in cells:
        pattern = one_hot_cell(x, y, width, height)
        agent = PaddleAgent(result.network, resolution=width, center=width // 2)
        agent.move(pattern)
        print(render_radar(pattern, agent.left, agent.right, width), end="")
        output = float(agent.output[0])
        print(
            f"Neural Network Output: {output:0.2f} "
            f"(ball x={x}, predicted x={decode_position(output, width)})"
        )


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    config = pipelines.load_preset(args.preset)
    if args.config:
        override = _load_override(args.config)
        if {"model", "data", "train"} <= set(override.keys()):
            config = json.loads(json.dumps(override))
        else:
            config = _merge(config, override)

    if args.activation:
        config.setdefault("model", {})["activation"] = args.activation
    if args.enable_plots:
        config.setdefault("train", {})["enable_plots"] = True
    if args.run_dir:
        config.setdefault("train", {})["run_dir"] = str(args.run_dir)
    if args.model_dir:
        config.setdefault("store", {})["model_dir"] = str(args.model_dir)

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    result = pipelines.run_pipeline(config, retrain=args.retrain)

    if args.probe:
        data_cfg = config.get("data", {})
        _probe(
            result,
            [tuple(cell) for cell in args.probe],
            int(data_cfg.get("width", 32)),
            int(data_cfg.get("height", 32)),
        )

    print(_format_result(result))
    if args.strict and not result.converged:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
