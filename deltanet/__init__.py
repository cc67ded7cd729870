"""deltanet public API."""

from .core import activations  # noqa: F401
from .core import types  # noqa: F401
from .core.errors import (
    ConfigurationError,
    DeltaNetError,
    DimensionMismatchError,
    InputArityError,
    PropagationError,
    StoreError,
)
from .core.layer import Layer
from .core.neuron import Neuron
from .models import Network, Perceptron, load_model
from .storage import ModelStore, TableFormat
from .training.loop import run_epoch
from .training.trainer import Trainer

__all__ = [
    "ConfigurationError",
    "DeltaNetError",
    "DimensionMismatchError",
    "InputArityError",
    "Layer",
    "ModelStore",
    "Network",
    "Neuron",
    "Perceptron",
    "PropagationError",
    "StoreError",
    "TableFormat",
    "Trainer",
    "activations",
    "load_model",
    "run_epoch",
    "types",
]
