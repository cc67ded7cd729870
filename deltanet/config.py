"""Typed model configuration read from ``model.json`` (or YAML)."""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from .core.errors import ConfigurationError
from .storage import ModelStore

CONFIG_FILES = ("model.json", "model.yaml", "model.yml")

C = TypeVar("C", bound="ModelConfig")


def _snake(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", str(key)).lower()


def _normalise(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {_snake(k): v for k, v in raw.items()}


def _as_int(value: Any, name: str) -> int:
    """Return ``value`` as an int; fractional, boolean and non-numeric values are rejected."""

    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc
    if not number.is_integer():
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    return int(number)


def _read_config_file(store: ModelStore) -> Mapping[str, Any]:
    for filename in CONFIG_FILES:
        if not store.exists(filename):
            continue
        text = store.read_text(filename)
        if filename.endswith((".yaml", ".yml")):
            try:
                import yaml  # type: ignore
            except Exception as exc:  # pragma: no cover - optional dependency
                raise RuntimeError("PyYAML is required to load YAML model configs") from exc
            data = yaml.safe_load(text) or {}
        else:
            try:
                data = json.loads(text or "{}")
            except json.JSONDecodeError as exc:
                raise ConfigurationError(f"{store.path(filename)} is not valid JSON: {exc}") from exc
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"{store.path(filename)} must decode to a mapping")
        return data
    raise ConfigurationError(
        f"Model {store.name!r} has no configuration file in {store.directory}"
    )


@dataclass(frozen=True)
class TransformersConfig:
    """Names of the input, data and label transformers."""

    input: str = "vector"
    data: str = "vector"
    label: str = "vector"

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "TransformersConfig":
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise ConfigurationError("'transformers' must be a mapping")
        values = _normalise(raw)
        return cls(
            input=str(values.get("input", cls.input)).lower(),
            data=str(values.get("data", cls.data)).lower(),
            label=str(values.get("label", cls.label)).lower(),
        )


@dataclass(frozen=True)
class TrainConfig:
    """Training dataset resource names."""

    data: str = "train-data"
    labels: str = "train-labels"

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> "TrainConfig":
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise ConfigurationError("'train' must be a mapping")
        return cls(
            data=str(raw.get("data", cls.data)),
            labels=str(raw.get("labels", cls.labels)),
        )


@dataclass(frozen=True)
class LayerConfig:
    size: int
    function: str = "sigmoid"


@dataclass(frozen=True)
class ModelConfig:
    """Settings shared by every model kind."""

    type: str
    inputs: int
    learning_rate: float = 0.01
    threshold: Optional[float] = None
    transformers: TransformersConfig = field(default_factory=TransformersConfig)
    train: TrainConfig = field(default_factory=TrainConfig)

    @classmethod
    def from_mapping(cls: Type[C], raw: Mapping[str, Any]) -> C:
        values = _normalise(raw)
        for key in ("type", "inputs"):
            if values.get(key) is None:
                raise ConfigurationError(f"Model configuration is missing required field {key!r}")
        inputs = _as_int(values["inputs"], "'inputs'")
        try:
            learning_rate = float(values.get("learning_rate", 0.01))
            threshold = values.get("threshold")
            threshold = float(threshold) if threshold is not None else None
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Malformed numeric field in model configuration: {exc}") from exc
        if inputs < 1:
            raise ConfigurationError(f"'inputs' must be at least 1, got {inputs}")
        if learning_rate <= 0:
            raise ConfigurationError(f"'learningRate' must be positive, got {learning_rate}")
        kwargs: Dict[str, Any] = {
            "type": str(values["type"]),
            "inputs": inputs,
            "learning_rate": learning_rate,
            "threshold": threshold,
            "transformers": TransformersConfig.from_mapping(values.get("transformers")),
            "train": TrainConfig.from_mapping(values.get("train")),
        }
        kwargs.update(cls._extra_fields(values))
        return cls(**kwargs)

    @classmethod
    def _extra_fields(cls, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PerceptronConfig(ModelConfig):
    function: str = "identity"
    state: str = "state"
    samples: str = "samples"

    @classmethod
    def _extra_fields(cls, values: Mapping[str, Any]) -> Dict[str, Any]:
        return {
            "function": str(values.get("function", "identity")),
            "state": str(values.get("state", "state")),
            "samples": str(values.get("samples", "samples")),
        }


@dataclass(frozen=True)
class NetworkConfig(ModelConfig):
    layers: List[LayerConfig] = field(default_factory=list)
    state: str = "state"

    @classmethod
    def _extra_fields(cls, values: Mapping[str, Any]) -> Dict[str, Any]:
        raw_layers = values.get("layers")
        if not raw_layers or not isinstance(raw_layers, list):
            raise ConfigurationError("Network configuration needs a non-empty 'layers' list")
        layers = []
        for idx, entry in enumerate(raw_layers):
            if not isinstance(entry, Mapping) or "size" not in entry:
                raise ConfigurationError(f"Layer {idx} must be a mapping with a 'size'")
            size = _as_int(entry["size"], f"Layer {idx} size")
            if size < 1:
                raise ConfigurationError(f"Layer {idx} size must be at least 1, got {size}")
            layers.append(LayerConfig(size=size, function=str(entry.get("function", "sigmoid"))))
        return {"layers": layers, "state": str(values.get("state", "state"))}

    @property
    def outputs(self) -> int:
        return self.layers[-1].size


def read_raw_config(store: ModelStore) -> Mapping[str, Any]:
    """Return the undecoded configuration mapping of ``store``'s model."""

    return _read_config_file(store)


__all__ = [
    "CONFIG_FILES",
    "LayerConfig",
    "ModelConfig",
    "NetworkConfig",
    "PerceptronConfig",
    "TrainConfig",
    "TransformersConfig",
    "read_raw_config",
]
