"""Single neuron: weight vector, bias and activation."""

from __future__ import annotations

import numpy as np

from .activations import ActivationFunction, get_activation
from .errors import ConfigurationError, DimensionMismatchError, PropagationError
from .types import Array, NeuronGradient


def _as_vector(values) -> Array:
    return np.asarray(values, dtype=np.float64).reshape(-1)


class Neuron:
    """Weighted sum of the inputs plus a bias, passed through an activation.

    ``weights`` and ``bias`` change only through :meth:`apply_update` or by
    building a new neuron from a persisted state row.
    """

    def __init__(
        self,
        input_count: int,
        weights,
        bias: float,
        activation: ActivationFunction | str,
    ) -> None:
        input_count = int(input_count)
        if input_count < 1:
            raise ConfigurationError(f"Neuron needs at least one input, got {input_count}")
        weights = _as_vector(weights).copy()
        if weights.shape[0] != input_count:
            raise DimensionMismatchError(
                f"Neuron expects {input_count} weights but received {weights.shape[0]}"
            )
        if isinstance(activation, str):
            activation = get_activation(activation)
        self.input_count = input_count
        self.weights = weights
        self.bias = float(bias)
        self.activation = activation
        self._last_inputs: Array | None = None
        self._last_z: float | None = None

    def __repr__(self) -> str:
        return (
            f"Neuron(input_count={self.input_count}, bias={self.bias!r}, "
            f"activation={self.activation.name!r})"
        )

    @classmethod
    def generate(
        cls,
        input_count: int,
        activation_name: str,
        rng: np.random.Generator | None = None,
    ) -> "Neuron":
        """Return a neuron with small uniform random parameters."""

        rng = rng or np.random.default_rng()
        weights = rng.uniform(-0.5, 0.5, size=int(input_count))
        bias = float(rng.uniform(-0.5, 0.5))
        return cls(input_count, weights, bias, activation_name)

    @classmethod
    def from_state(
        cls,
        row,
        activation_name: str,
        input_count: int | None = None,
    ) -> "Neuron":
        """Rebuild a neuron from a ``[bias, w0, ..., wn-1]`` row."""

        row = _as_vector(row)
        if row.shape[0] < 2:
            raise DimensionMismatchError("State row needs a bias and at least one weight")
        if not np.all(np.isfinite(row)):
            raise ValueError(f"State row holds non-numeric values: {row}")
        count = row.shape[0] - 1
        if input_count is not None and count != int(input_count):
            raise DimensionMismatchError(
                f"State row holds {count} weights but {input_count} inputs are configured"
            )
        return cls(count, row[1:], row[0], activation_name)

    def state(self) -> Array:
        return np.concatenate(([self.bias], self.weights))

    def forward(self, inputs) -> float:
        inputs = _as_vector(inputs)
        if inputs.shape[0] != self.input_count:
            raise DimensionMismatchError(
                f"Neuron expects {self.input_count} inputs but received {inputs.shape[0]}"
            )
        z = self.bias + float(self.weights @ inputs)
        self._last_inputs = inputs
        self._last_z = z
        return float(self.activation.apply(z))

    def backward(self, upstream: float) -> NeuronGradient:
        """Combine ``upstream`` with the local derivative of the last forward."""

        if self._last_z is None or self._last_inputs is None:
            raise PropagationError("Neuron.backward called without a preceding forward pass")
        local = float(upstream) * float(self.activation.derivative(self._last_z))
        gradient = NeuronGradient(
            bias=local,
            weights=local * self._last_inputs,
            inputs=local * self.weights,
        )
        self._last_inputs = None
        self._last_z = None
        return gradient

    def apply_update(self, weight_step, bias_step: float) -> None:
        weight_step = _as_vector(weight_step)
        if weight_step.shape[0] != self.input_count:
            raise DimensionMismatchError(
                f"Weight step has {weight_step.shape[0]} entries, expected {self.input_count}"
            )
        self.weights -= weight_step
        self.bias -= float(bias_step)


__all__ = ["Neuron"]
