import numpy as np
import pytest

from pongnet.core import activations


@pytest.mark.parametrize("name", ["tanh", "sigmoid"])
def test_derivative_matches_finite_difference(name):
    act = activations.get(name)
    x = np.linspace(-3.0, 3.0, 13)
    eps = 1e-6
    numeric = (act.fn(x + eps) - act.fn(x - eps)) / (2 * eps)
    assert np.allclose(act.deriv(act.fn(x)), numeric, atol=1e-8)


def test_activations_are_bounded():
    x = np.array([-50.0, 0.0, 50.0])
    assert np.allclose(activations.tanh(x), [-1.0, 0.0, 1.0])
    assert np.allclose(activations.sigmoid(x), [0.0, 0.5, 1.0])


def test_registry_lookup():
    assert activations.names() == ["sigmoid", "tanh"]
    with pytest.raises(KeyError, match="Available"):
        activations.get("softplus")
