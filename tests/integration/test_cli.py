import json

import pytest

from cli.main import main


def _write_config(tmp_path, learning_rate=0.5, **train):
    train_cfg = {"max_epochs": 5000, "warmup_epochs": 0, "eval_every": 10}
    train_cfg.update(train)
    config = {
        "model": {"layers": [16, 1], "activation": "tanh", "learning_rate": learning_rate, "seed": 0},
        "data": {"width": 4, "height": 4},
        "train": train_cfg,
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config))
    return path


def _last_json(capsys):
    lines = [line for line in capsys.readouterr().out.splitlines() if line.strip()]
    return json.loads(lines[-1])


def test_cli_trains_then_loads(tmp_path, capsys):
    config = _write_config(tmp_path)
    args = [
        "--config", str(config),
        "--model-dir", str(tmp_path / "models"),
        "--run-dir", str(tmp_path / "run"),
        "--log-level", "WARNING",
    ]
    main(args)
    first = _last_json(capsys)
    assert first["loaded"] is False
    assert first["converged"] is True
    assert first["epochs"] > 0
    assert first["final"]["accuracy"] == 1.0
    assert (tmp_path / "run" / "metrics.jsonl").exists()

    main(args)
    second = _last_json(capsys)
    assert second["loaded"] is True
    assert second["model"] == first["model"]


def test_cli_probe_prints_radar(tmp_path, capsys):
    config = _write_config(tmp_path)
    main([
        "--config", str(config),
        "--model-dir", str(tmp_path / "models"),
        "--run-dir", str(tmp_path / "run"),
        "--probe", "3", "1",
        "--probe", "0", "0",
    ])
    out = capsys.readouterr().out
    assert "....\n...O\n....\n" in out
    assert "(ball x=3, predicted x=3)" in out
    assert "(ball x=0, predicted x=0)" in out


def test_cli_yaml_override_and_dump(tmp_path, capsys):
    yaml_path = tmp_path / "override.yaml"
    yaml_path.write_text(
        "model:\n  layers: [16, 1]\n  learning_rate: 0.5\n"
        "data:\n  width: 4\n  height: 4\n"
        "train:\n  max_epochs: 5000\n  warmup_epochs: 0\n"
    )
    dump = tmp_path / "resolved.json"
    main([
        "--preset", "fast",
        "--config", str(yaml_path),
        "--model-dir", str(tmp_path / "models"),
        "--run-dir", str(tmp_path / "run"),
        "--dump-config", str(dump),
    ])
    resolved = json.loads(dump.read_text())
    assert resolved["model"]["layers"] == [16, 1]
    assert resolved["store"]["model_dir"] == str(tmp_path / "models")
    assert _last_json(capsys)["converged"] is True


def test_cli_strict_exits_on_non_convergence(tmp_path):
    config = _write_config(tmp_path, learning_rate=0.001, max_epochs=1)
    with pytest.warns(Warning), pytest.raises(SystemExit) as exc:
        main([
            "--config", str(config),
            "--model-dir", str(tmp_path / "models"),
            "--run-dir", str(tmp_path / "run"),
            "--strict",
        ])
    assert exc.value.code == 1


def test_cli_lists_presets(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--list-presets"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.split() == ["fast", "reference"]


def test_cli_activation_override(tmp_path, capsys):
    config = _write_config(tmp_path, learning_rate=0.001, max_epochs=1)
    dump = tmp_path / "resolved.json"
    with pytest.warns(Warning):
        main([
            "--config", str(config),
            "--activation", "sigmoid",
            "--model-dir", str(tmp_path / "models"),
            "--run-dir", str(tmp_path / "run"),
            "--dump-config", str(dump),
        ])
    assert json.loads(dump.read_text())["model"]["activation"] == "sigmoid"
    assert "Activation    : sigmoid" in capsys.readouterr().out


def test_cli_rejects_unknown_activation(tmp_path):
    config = _write_config(tmp_path)
    with pytest.raises(SystemExit) as exc:
        main(["--config", str(config), "--activation", "relu"])
    assert exc.value.code == 2
