"""Input, data and label transformers selected by name from configuration."""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING, Callable, Dict, Iterable, List, MutableMapping, Type, TypeVar

import numpy as np
from sklearn.preprocessing import OneHotEncoder

from .core.errors import ConfigurationError
from .core.types import Array

if TYPE_CHECKING:  # pragma: no cover
    from .models.base import BaseModel

T = TypeVar("T")


class TransformerRegistry:
    """Name -> transformer class mapping for one transformer kind."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._registry: MutableMapping[str, type] = {}

    def register(self, name: str) -> Callable[[Type[T]], Type[T]]:
        def _decorator(cls: Type[T]) -> Type[T]:
            self._registry[name.lower()] = cls
            return cls

        return _decorator

    def get(self, name: str) -> type:
        key = str(name).lower()
        if key not in self._registry:
            available = ", ".join(self.names())
            raise ConfigurationError(
                f"Unknown {self.kind} transformer {name!r}. Available: {available}"
            )
        return self._registry[key]

    def create(self, name: str, model: "BaseModel"):
        return self.get(name)(model)

    def names(self) -> Iterable[str]:
        return sorted(self._registry)


INPUT_TRANSFORMERS = TransformerRegistry("input")
DATA_TRANSFORMERS = TransformerRegistry("data")
LABEL_TRANSFORMERS = TransformerRegistry("label")


class InputTransformer:
    """Turn an inference input file into a model input vector."""

    def __init__(self, model: "BaseModel") -> None:
        self.model = model

    def transform(self, resource: str) -> Array:
        raise NotImplementedError


class DataTransformer:
    """Turn the training data resource into an input matrix."""

    def __init__(self, model: "BaseModel") -> None:
        self.model = model

    def transform(self, resource: str) -> Array:
        raise NotImplementedError


class LabelTransformer:
    """Map training labels to target rows and model outputs to label strings."""

    def __init__(self, model: "BaseModel") -> None:
        self.model = model

    def transform_labels(self) -> Array:
        raise NotImplementedError

    def transform_output(self, output: Array) -> List[str]:
        raise NotImplementedError


@INPUT_TRANSFORMERS.register("vector")
class VectorInputTransformer(InputTransformer):
    def transform(self, resource: str) -> Array:
        return self.model.store.read_table(resource)[0]


@DATA_TRANSFORMERS.register("vector")
class VectorDataTransformer(DataTransformer):
    def transform(self, resource: str) -> Array:
        return self.model.store.read_table(resource)


@LABEL_TRANSFORMERS.register("vector")
class VectorLabelTransformer(LabelTransformer):
    """Targets are numeric rows; outputs are reported as raw values."""

    def transform_labels(self) -> Array:
        return self.model.store.read_table(self.model.config.train.labels)

    def transform_output(self, output: Array) -> List[str]:
        return [repr(float(value)) for value in np.asarray(output).reshape(-1)]


@LABEL_TRANSFORMERS.register("single")
class SingleLabelTransformer(LabelTransformer):
    """One label per sample, one-hot encoded in ``labels`` file order.

    The label list is the ``labels`` resource; the line index of a label is
    the output index that represents it.
    """

    LABELS_RESOURCE = "labels"

    @cached_property
    def labels(self) -> List[str]:
        return self.model.store.read_lines(self.LABELS_RESOURCE)

    @cached_property
    def train_labels(self) -> List[str]:
        return self.model.store.read_lines(self.model.config.train.labels)

    @cached_property
    def _targets(self) -> Array:
        if any(not label for label in self.train_labels):
            raise ConfigurationError(
                f"Blank line in training labels {self.model.config.train.labels!r}"
            )
        positions = {}
        for index, label in enumerate(self.labels):
            if label:
                positions.setdefault(label, index)
        unknown = sorted({label for label in self.train_labels if label not in positions})
        if unknown:
            raise ConfigurationError(f"Training labels not present in label list: {unknown}")
        # Categories are line positions; blank or repeated lines keep their slot.
        encoder = OneHotEncoder(
            categories=[np.arange(len(self.labels))], sparse_output=False, dtype=np.float64
        )
        column = np.array([positions[label] for label in self.train_labels]).reshape(-1, 1)
        return encoder.fit_transform(column)

    def transform_labels(self) -> Array:
        return self._targets

    def transform_output(self, output: Array) -> List[str]:
        index = int(np.argmax(np.asarray(output).reshape(-1)))
        return [self.labels[index]]


def build_transformers(model: "BaseModel") -> Dict[str, object]:
    """Instantiate the transformers named in ``model.config``."""

    names = model.config.transformers
    return {
        "input": INPUT_TRANSFORMERS.create(names.input, model),
        "data": DATA_TRANSFORMERS.create(names.data, model),
        "label": LABEL_TRANSFORMERS.create(names.label, model),
    }


__all__ = [
    "DATA_TRANSFORMERS",
    "DataTransformer",
    "INPUT_TRANSFORMERS",
    "InputTransformer",
    "LABEL_TRANSFORMERS",
    "LabelTransformer",
    "SingleLabelTransformer",
    "TransformerRegistry",
    "VectorDataTransformer",
    "VectorInputTransformer",
    "VectorLabelTransformer",
    "build_transformers",
]
