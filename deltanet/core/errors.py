"""Exception hierarchy for deltanet."""

from __future__ import annotations


class DeltaNetError(Exception):
    """Base class for every error raised by deltanet."""


class ConfigurationError(DeltaNetError, ValueError):
    """Unknown component name or a missing/malformed configuration field."""


class DimensionMismatchError(DeltaNetError, ValueError):
    """A vector's length disagrees with the width a unit expects."""


class InputArityError(DimensionMismatchError):
    """A model received an input vector of the wrong length."""


class PropagationError(DeltaNetError, RuntimeError):
    """Backward pass requested without a matching forward pass."""


class StoreError(DeltaNetError, OSError):
    """A model resource could not be read from the store."""


__all__ = [
    "ConfigurationError",
    "DeltaNetError",
    "DimensionMismatchError",
    "InputArityError",
    "PropagationError",
    "StoreError",
]
