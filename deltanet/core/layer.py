"""Layer of neurons sharing one input width."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .errors import ConfigurationError, DimensionMismatchError
from .neuron import Neuron
from .types import Array, LayerGradient


class Layer:
    """Ordered neurons evaluated on the same input vector."""

    def __init__(self, neurons: Sequence[Neuron]) -> None:
        neurons = list(neurons)
        if not neurons:
            raise ConfigurationError("Layer needs at least one neuron")
        widths = {neuron.input_count for neuron in neurons}
        if len(widths) != 1:
            raise ConfigurationError(
                f"Neurons in a layer must share one input count, got {sorted(widths)}"
            )
        self.neurons: List[Neuron] = neurons

    @property
    def size(self) -> int:
        return len(self.neurons)

    @property
    def input_count(self) -> int:
        return self.neurons[0].input_count

    @classmethod
    def generate(
        cls,
        size: int,
        input_count: int,
        activation_name: str,
        rng: np.random.Generator | None = None,
    ) -> "Layer":
        rng = rng or np.random.default_rng()
        return cls([Neuron.generate(input_count, activation_name, rng) for _ in range(int(size))])

    @classmethod
    def from_state(cls, table, activation_name: str, input_count: int | None = None) -> "Layer":
        """Rebuild a layer from one ``[bias, w0..wn-1]`` row per neuron."""

        table = np.atleast_2d(np.asarray(table, dtype=np.float64))
        return cls([Neuron.from_state(row, activation_name, input_count) for row in table])

    def state(self) -> Array:
        return np.vstack([neuron.state() for neuron in self.neurons])

    def forward(self, inputs) -> Array:
        return np.array([neuron.forward(inputs) for neuron in self.neurons], dtype=np.float64)

    def backward(self, upstream_errors) -> LayerGradient:
        upstream = np.asarray(upstream_errors, dtype=np.float64).reshape(-1)
        if upstream.shape[0] != self.size:
            raise DimensionMismatchError(
                f"Layer of size {self.size} received {upstream.shape[0]} upstream errors"
            )
        grads = [neuron.backward(err) for neuron, err in zip(self.neurons, upstream)]
        return LayerGradient(
            bias=np.array([g.bias for g in grads], dtype=np.float64),
            weights=np.vstack([g.weights for g in grads]),
            inputs=np.vstack([g.inputs for g in grads]),
        )

    def apply_update(self, gradient: LayerGradient, learning_rate: float) -> None:
        if gradient.size != self.size:
            raise DimensionMismatchError(
                f"Gradient covers {gradient.size} neurons, layer has {self.size}"
            )
        for idx, neuron in enumerate(self.neurons):
            neuron.apply_update(
                learning_rate * gradient.weights[idx],
                learning_rate * gradient.bias[idx],
            )


__all__ = ["Layer"]
