"""Core typing contracts for deltanet."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

Array = np.ndarray


@dataclass(frozen=True)
class NeuronGradient:
    """Gradient information produced by :meth:`Neuron.backward`.

    Attributes
    ----------
    bias:
        Local gradient of the neuron, which is also the bias contribution.
    weights:
        Contribution for each weight, ``bias * inputs``.
    inputs:
        Contribution propagated to each input, ``bias * weights``.
    """

    bias: float
    weights: Array
    inputs: Array


@dataclass(frozen=True)
class LayerGradient:
    """Per-neuron, per-input gradient table for a whole layer."""

    bias: Array
    weights: Array
    inputs: Array

    @property
    def size(self) -> int:
        return int(self.bias.shape[0])

    def propagate(self) -> Array:
        """Sum input contributions over the neurons that consumed each input."""

        return self.inputs.sum(axis=0)


@dataclass(frozen=True)
class EpochReport:
    """Outcome of one training epoch."""

    epoch: int
    cost: float
    seconds: float
    converged: bool = False


@dataclass
class TrainResult:
    """Summary returned by :meth:`deltanet.training.trainer.Trainer.run`."""

    epochs_run: int
    last_cost: float | None
    converged: bool
    history: List[EpochReport] = field(default_factory=list)
