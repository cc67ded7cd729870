"""Model interface, shared lifecycle plumbing and the model-kind registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, MutableMapping, Protocol, Type

import numpy as np

from ..config import ModelConfig, read_raw_config
from ..core.errors import ConfigurationError, InputArityError
from ..core.types import Array
from ..storage import DEFAULT_ROOT, ModelStore, TableFormat
from ..transformers import build_transformers

logger = logging.getLogger(__name__)


class TrainableModel(Protocol):
    """Capabilities the training loop and the CLI rely on."""

    name: str
    config: ModelConfig
    store: ModelStore
    loaded: bool

    def initialize(self) -> None:
        """Load persisted parameters or fall back to fresh random ones."""

    def run_epoch(self) -> float:
        """Run one online epoch and return the accumulated error."""

    def process(self, inputs) -> Array:
        """Return the raw output vector for ``inputs``."""

    def run(self, inputs) -> List[str]:
        """Return the label strings for ``inputs``."""

    def run_file(self, resource: str) -> List[str]:
        """Return the label strings for an input resource."""

    def save(self) -> None:
        """Persist the current parameters."""

    def delete(self) -> None:
        """Remove persisted parameters; in-memory ones are kept."""

    def info(self) -> str:
        """Return a human readable parameter summary."""


class BaseModel:
    """Store, configuration and transformer wiring shared by model kinds.

    Subclasses implement ``_load_state``, ``_generate``, ``save``, ``delete``,
    ``info``, ``process`` and ``run_epoch``.
    """

    def __init__(
        self,
        name: str,
        config: ModelConfig,
        store: ModelStore,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.name = name
        self.config = config
        self.store = store
        self.rng = rng or np.random.default_rng()
        self.loaded = False
        transformers = build_transformers(self)
        self.input_transformer = transformers["input"]
        self.data_transformer = transformers["data"]
        self.label_transformer = transformers["label"]
        self.initialize()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, loaded={self.loaded})"

    def initialize(self) -> None:
        try:
            self._load_state()
        except (OSError, ValueError, IndexError) as exc:
            logger.info("No usable state for model %r (%s); generating new parameters", self.name, exc)
            self._generate()
            self.loaded = False
        else:
            logger.info("Loaded state for model %r", self.name)
            self.loaded = True

    def _load_state(self) -> None:
        raise NotImplementedError

    def _generate(self) -> None:
        raise NotImplementedError

    def _check_inputs(self, inputs) -> Array:
        inputs = np.asarray(inputs, dtype=np.float64).reshape(-1)
        if inputs.shape[0] != self.config.inputs:
            raise InputArityError(
                f"Model {self.name!r} expects {self.config.inputs} inputs but received {inputs.shape[0]}"
            )
        return inputs

    def run(self, inputs) -> List[str]:
        return self.label_transformer.transform_output(self.process(inputs))

    def run_file(self, resource: str) -> List[str]:
        """Run the model on an input resource read by the input transformer."""

        return self.run(self.input_transformer.transform(resource))


@dataclass(frozen=True)
class ModelKind:
    name: str
    model_cls: type
    config_cls: Type[ModelConfig]


_REGISTRY: MutableMapping[str, ModelKind] = {}


def register_model(
    name: str, config_cls: Type[ModelConfig]
) -> Callable[[type], type]:
    """Class decorator registering a model kind under ``name``."""

    def _decorator(cls: type) -> type:
        _REGISTRY[name.lower()] = ModelKind(name=name, model_cls=cls, config_cls=config_cls)
        return cls

    return _decorator


def get_model_kind(name: str) -> ModelKind:
    key = str(name).lower()
    if key not in _REGISTRY:
        available = ", ".join(available_models())
        raise ConfigurationError(f"Unknown model type {name!r}. Available types: {available}")
    return _REGISTRY[key]


def available_models() -> List[str]:
    return sorted(_REGISTRY)


def load_model(
    name: str,
    root: str | Path = DEFAULT_ROOT,
    *,
    rng: np.random.Generator | None = None,
    table_format: TableFormat | None = None,
) -> TrainableModel:
    """Read ``<root>/<name>/model.json`` and construct the configured model."""

    store = ModelStore(root, name, table_format=table_format)
    raw = read_raw_config(store)
    if raw.get("type") is None:
        raise ConfigurationError(f"Model {name!r} configuration is missing required field 'type'")
    kind = get_model_kind(str(raw["type"]))
    config = kind.config_cls.from_mapping(raw)
    return kind.model_cls(name, config, store, rng=rng)


__all__ = [
    "BaseModel",
    "ModelKind",
    "TrainableModel",
    "available_models",
    "get_model_kind",
    "load_model",
    "register_model",
]
