import numpy as np
import pytest

from deltanet.core.activations import REGISTRY, get_activation
from deltanet.core.errors import ConfigurationError


def test_identity_and_sigmoid_values():
    identity = get_activation("identity")
    assert identity.apply(3.5) == 3.5
    assert identity.derivative(-7.0) == 1.0

    sigmoid = get_activation("sigmoid")
    assert sigmoid.apply(0.0) == pytest.approx(0.5)
    assert sigmoid.derivative(0.0) == pytest.approx(0.25)


def test_sigmoid_saturates_without_overflow():
    sigmoid = get_activation("sigmoid")
    with np.errstate(over="raise"):
        assert sigmoid.apply(1000.0) == pytest.approx(1.0)
        assert sigmoid.apply(-1000.0) == pytest.approx(0.0)
        assert sigmoid.derivative(-1000.0) == pytest.approx(0.0)


@pytest.mark.parametrize("name", ["identity", "sigmoid", "tanh", "relu"])
def test_derivative_matches_finite_difference(name):
    activation = get_activation(name)
    eps = 1e-6
    for z in (-1.3, -0.2, 0.4, 2.1):
        numeric = (activation.apply(z + eps) - activation.apply(z - eps)) / (2 * eps)
        assert activation.derivative(z) == pytest.approx(numeric, rel=1e-5, abs=1e-8)


def test_lookup_is_case_insensitive_and_shared():
    assert get_activation("Sigmoid") is get_activation("sigmoid")
    assert "TANH" in REGISTRY


def test_unknown_activation_is_configuration_error():
    with pytest.raises(ConfigurationError, match="softplus"):
        get_activation("softplus")
