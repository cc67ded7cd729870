"""Core numerical primitives for deltanet."""

from . import activations, errors, types
from .layer import Layer
from .neuron import Neuron

__all__ = ["Layer", "Neuron", "activations", "errors", "types"]
