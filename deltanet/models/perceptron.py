"""Single-neuron model trained with the delta rule."""

from __future__ import annotations

import numpy as np

from ..config import PerceptronConfig
from ..core.neuron import Neuron
from ..core.types import Array
from ..training.loop import run_epoch, split_samples
from .base import BaseModel, register_model


@register_model("perceptron", PerceptronConfig)
class Perceptron(BaseModel):
    """One neuron fed from a sample table of ``inputs ++ target`` rows."""

    config: PerceptronConfig
    neuron: Neuron

    def _load_state(self) -> None:
        state = self.store.read_table(self.config.state)[0]
        self.neuron = Neuron.from_state(state, self.config.function, self.config.inputs)

    def _generate(self) -> None:
        self.neuron = Neuron.generate(self.config.inputs, self.config.function, self.rng)

    def save(self) -> None:
        self.store.write_table(self.config.state, self.neuron.state())

    def delete(self) -> None:
        self.store.delete(self.config.state)

    def info(self) -> str:
        weights = np.array2string(self.neuron.weights, precision=6, separator=", ")
        return f"Weights:\n{weights}\nBias: {self.neuron.bias}"

    def process(self, inputs) -> Array:
        inputs = self._check_inputs(inputs)
        return np.array([self.neuron.forward(inputs)], dtype=np.float64)

    def teach(self, inputs, outputs) -> float:
        """Apply one delta-rule step and return the signed error.

        ``error = prediction - target``; every weight moves by
        ``-rate * error * input`` and the bias by ``-rate * error``.
        """

        inputs = self._check_inputs(inputs)
        target = float(np.asarray(outputs, dtype=np.float64).reshape(-1)[0])
        error = float(self.process(inputs)[0] - target)
        rate = self.config.learning_rate
        self.neuron.apply_update(rate * error * inputs, rate * error)
        return error

    def run_epoch(self) -> float:
        samples = self.store.read_table(self.config.samples)
        inputs, targets = split_samples(samples, self.config.inputs)
        return run_epoch(self.teach, inputs, targets[:, :1], self.rng)


__all__ = ["Perceptron"]
