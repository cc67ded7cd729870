"""Model kinds and the registry used to build them from configuration."""

from .base import (
    BaseModel,
    TrainableModel,
    available_models,
    get_model_kind,
    load_model,
    register_model,
)
from .network import Network
from .perceptron import Perceptron

__all__ = [
    "BaseModel",
    "Network",
    "Perceptron",
    "TrainableModel",
    "available_models",
    "get_model_kind",
    "load_model",
    "register_model",
]
