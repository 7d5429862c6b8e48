import numpy as np
import pytest

from pongnet.core.network import Network
from pongnet.storage.model_store import ModelStore


def _snapshot(net):
    return {k: v.copy() for k, v in net.state_dict().items()}


def _unchanged(net, snapshot):
    state = net.state_dict()
    return all(np.array_equal(state[k], snapshot[k]) for k in snapshot)


def test_round_trip_reproduces_outputs_for_every_cell(tmp_path):
    store = ModelStore(tmp_path)
    source = Network([1024, 1], seed=11)
    path = store.save(source)
    assert path == tmp_path / "model-1024x1.npz"
    assert store.exists(source)

    target = Network([1024, 1], seed=99)
    assert store.load(target) is True
    eye = np.eye(1024)
    assert np.allclose(target.forward(eye), source.forward(eye), atol=1e-9, rtol=0)


def test_round_trip_with_hidden_layer(tmp_path):
    store = ModelStore(tmp_path / "nested" / "dir")
    source = Network([8, 5, 2], activation="sigmoid", seed=1)
    store.save(source)
    target = Network([8, 5, 2], activation="sigmoid", seed=2)
    assert store.load(target)
    for key, value in source.state_dict().items():
        assert np.array_equal(target.state_dict()[key], value)


def test_save_leaves_no_temporary_files(tmp_path):
    store = ModelStore(tmp_path)
    net = Network([4, 1], seed=0)
    store.save(net)
    store.save(net)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["model-4x1.npz"]


def test_missing_model_returns_false(tmp_path):
    net = Network([4, 1], seed=0)
    snapshot = _snapshot(net)
    assert ModelStore(tmp_path).load(net) is False
    assert _unchanged(net, snapshot)


def test_topology_mismatch_is_rejected(tmp_path):
    store = ModelStore(tmp_path)
    store.save(Network([1024, 1], seed=0))

    other = Network([1024, 2], seed=1)
    snapshot = _snapshot(other)
    assert store.load(other) is False
    # even when the file is offered under the other topology's name
    (tmp_path / "model-1024x1.npz").rename(store.path_for(other.layer_sizes))
    assert store.load(other) is False
    assert _unchanged(other, snapshot)


def test_activation_mismatch_is_rejected(tmp_path):
    store = ModelStore(tmp_path)
    store.save(Network([4, 1], activation="sigmoid", seed=0))
    net = Network([4, 1], activation="tanh", seed=1)
    snapshot = _snapshot(net)
    assert store.load(net) is False
    assert _unchanged(net, snapshot)


@pytest.mark.parametrize("keep", [0, 3, 0.5])
def test_truncated_model_degrades_to_false(tmp_path, keep):
    store = ModelStore(tmp_path)
    path = store.save(Network([1024, 1], seed=0))
    data = path.read_bytes()
    cut = int(len(data) * keep) if isinstance(keep, float) else keep
    path.write_bytes(data[:cut])

    net = Network([1024, 1], seed=4)
    snapshot = _snapshot(net)
    assert store.load(net) is False
    assert _unchanged(net, snapshot)


def test_garbage_and_wrong_shapes_degrade_to_false(tmp_path):
    store = ModelStore(tmp_path)
    net = Network([4, 1], seed=0)
    snapshot = _snapshot(net)

    store.path_for(net.layer_sizes).write_bytes(b"not a model at all")
    assert store.load(net) is False

    np.savez(
        store.path_for(net.layer_sizes),
        layer_sizes=np.array([4, 1]),
        activation=np.asarray("tanh"),
        W0=np.zeros((3, 1)),
        b0=np.zeros(1),
    )
    assert store.load(net) is False

    np.savez(
        store.path_for(net.layer_sizes),
        layer_sizes=np.array([4, 1]),
        activation=np.asarray("tanh"),
        W0=np.zeros((4, 1)),
    )
    assert store.load(net) is False

    np.savez(
        store.path_for(net.layer_sizes),
        layer_sizes=np.array([4, 1]),
        activation=np.asarray("tanh"),
        W0=np.array([["x"], ["y"], ["z"], ["w"]]),
        b0=np.array(["q"]),
    )
    assert store.load(net) is False

    np.savez(
        store.path_for(net.layer_sizes),
        layer_sizes=np.array([4, 1]),
        activation=np.asarray("tanh"),
        W0=np.zeros((4, 1), dtype=np.complex128),
        b0=np.zeros(1),
    )
    assert store.load(net) is False
    assert _unchanged(net, snapshot)


def test_explicit_path_load(tmp_path):
    store = ModelStore(tmp_path / "a")
    saved = store.save(Network([4, 1], seed=0))
    net = Network([4, 1], seed=5)
    assert ModelStore(tmp_path / "b").load(net, path=saved)
