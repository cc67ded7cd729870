"""Multi-layer model trained with per-sample backpropagation."""

from __future__ import annotations

from typing import List

import numpy as np

from ..config import NetworkConfig
from ..core.errors import DimensionMismatchError
from ..core.layer import Layer
from ..core.types import Array
from ..training.loop import run_epoch
from .base import BaseModel, register_model


@register_model("network", NetworkConfig)
class Network(BaseModel):
    """Ordered layers; layer ``k``'s size is layer ``k + 1``'s input count.

    Parameters are persisted as one table per layer, ``<state>-<k>``, with a
    ``[bias, w0, ..., wn-1]`` row per neuron.
    """

    config: NetworkConfig
    layers: List[Layer]

    def _state_resource(self, index: int) -> str:
        return f"{self.config.state}-{index}"

    def _input_counts(self) -> List[int]:
        return [self.config.inputs] + [layer.size for layer in self.config.layers[:-1]]

    def _load_state(self) -> None:
        layers = []
        for idx, (layer_cfg, input_count) in enumerate(zip(self.config.layers, self._input_counts())):
            table = self.store.read_table(self._state_resource(idx))
            layer = Layer.from_state(table, layer_cfg.function, input_count)
            if layer.size != layer_cfg.size:
                raise DimensionMismatchError(
                    f"Stored layer {idx} has {layer.size} neurons, configured {layer_cfg.size}"
                )
            layers.append(layer)
        self.layers = layers

    def _generate(self) -> None:
        self.layers = [
            Layer.generate(layer_cfg.size, input_count, layer_cfg.function, self.rng)
            for layer_cfg, input_count in zip(self.config.layers, self._input_counts())
        ]

    def save(self) -> None:
        for idx, layer in enumerate(self.layers):
            self.store.write_table(self._state_resource(idx), layer.state())

    def delete(self) -> None:
        for idx in range(len(self.config.layers)):
            self.store.delete(self._state_resource(idx))

    def info(self) -> str:
        lines = []
        for idx, layer in enumerate(self.layers):
            lines.append(f"Layer {idx} ({layer.size} x {layer.input_count}):")
            for neuron in layer.neurons:
                weights = np.array2string(neuron.weights, precision=6, separator=", ")
                lines.append(f"  bias {neuron.bias:.6f} weights {weights}")
        return "\n".join(lines)

    def process(self, inputs) -> Array:
        values = self._check_inputs(inputs)
        for layer in self.layers:
            values = layer.forward(values)
        return values

    def teach(self, inputs, targets) -> float:
        """Backpropagate one sample and return its half squared error."""

        targets = np.asarray(targets, dtype=np.float64).reshape(-1)
        if targets.shape[0] != self.config.outputs:
            raise DimensionMismatchError(
                f"Model {self.name!r} has {self.config.outputs} outputs but the target has {targets.shape[0]}"
            )
        error = self.process(inputs) - targets
        upstream = error
        rate = self.config.learning_rate
        for layer in reversed(self.layers):
            gradient = layer.backward(upstream)
            upstream = gradient.propagate()
            layer.apply_update(gradient, rate)
        return float(0.5 * np.sum(error ** 2))

    def run_epoch(self) -> float:
        inputs = self.data_transformer.transform(self.config.train.data)
        targets = self.label_transformer.transform_labels()
        if inputs.shape[0] != targets.shape[0]:
            raise DimensionMismatchError(
                f"{inputs.shape[0]} training samples but {targets.shape[0]} target rows"
            )
        return run_epoch(self.teach, inputs, targets, self.rng)


__all__ = ["Network"]
