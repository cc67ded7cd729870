"""Activation functions and their registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

import numpy as np

from .errors import ConfigurationError

ScalarFn = Callable[[float], float]


@dataclass(frozen=True)
class ActivationFunction:
    """Scalar non-linearity paired with its derivative.

    Both callables take the *pre-activation* value ``z``; ``derivative(z)`` is
    the true ``d apply / dz`` at that point.
    """

    name: str
    fn: ScalarFn
    deriv: ScalarFn

    def apply(self, x):
        return self.fn(x)

    def derivative(self, x):
        return self.deriv(x)


class ActivationRegistry:
    """Central registry mapping names to shared activation instances."""

    def __init__(self) -> None:
        self._registry: Dict[str, ActivationFunction] = {}

    def register(self, name: str, fn: ScalarFn, deriv: ScalarFn) -> ActivationFunction:
        activation = ActivationFunction(name, fn, deriv)
        self._registry[name.lower()] = activation
        return activation

    def get(self, name: str) -> ActivationFunction:
        key = str(name).lower()
        if key not in self._registry:
            available = ", ".join(self.names())
            raise ConfigurationError(
                f"Unknown activation function {name!r}. Available functions: {available}"
            )
        return self._registry[key]

    def names(self) -> Iterable[str]:
        return sorted(self._registry)

    def __contains__(self, name: object) -> bool:
        return str(name).lower() in self._registry


REGISTRY = ActivationRegistry()


def _identity(x):
    return x


def _identity_deriv(x):
    return np.ones_like(x, dtype=np.float64) if np.ndim(x) else 1.0


def _sigmoid(x):
    # Split on sign so exp never overflows.
    x = np.asarray(x, dtype=np.float64)
    out = np.where(
        x >= 0,
        1.0 / (1.0 + np.exp(-np.abs(x))),
        np.exp(-np.abs(x)) / (1.0 + np.exp(-np.abs(x))),
    )
    return float(out) if out.ndim == 0 else out


def _sigmoid_deriv(x):
    s = _sigmoid(x)
    return s * (1.0 - s)


def _tanh(x):
    out = np.tanh(x)
    return float(out) if np.ndim(out) == 0 else out


def _tanh_deriv(x):
    return 1.0 - _tanh(x) ** 2


def _relu(x):
    out = np.maximum(x, 0.0)
    return float(out) if np.ndim(out) == 0 else out


def _relu_deriv(x):
    out = (np.asarray(x) > 0).astype(np.float64)
    return float(out) if out.ndim == 0 else out


IDENTITY = REGISTRY.register("identity", _identity, _identity_deriv)
SIGMOID = REGISTRY.register("sigmoid", _sigmoid, _sigmoid_deriv)
TANH = REGISTRY.register("tanh", _tanh, _tanh_deriv)
RELU = REGISTRY.register("relu", _relu, _relu_deriv)


def get_activation(name: str) -> ActivationFunction:
    """Resolve ``name`` against the default registry."""

    return REGISTRY.get(name)


__all__ = [
    "ActivationFunction",
    "ActivationRegistry",
    "IDENTITY",
    "REGISTRY",
    "RELU",
    "SIGMOID",
    "TANH",
    "get_activation",
]
