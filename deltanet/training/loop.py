"""Online (per-sample) epoch runner."""

from __future__ import annotations

from typing import Callable, Optional, Tuple

import numpy as np

from ..core.errors import DimensionMismatchError
from ..core.types import Array

TeachFn = Callable[[Array, Array], float]
SampleCallback = Callable[[int, float], None]


def split_samples(table, input_count: int) -> Tuple[Array, Array]:
    """Split a sample table into input columns and target columns."""

    table = np.atleast_2d(np.asarray(table, dtype=np.float64))
    if table.shape[1] <= input_count:
        raise DimensionMismatchError(
            f"Sample table has {table.shape[1]} columns; {input_count} inputs "
            "plus at least one target are required"
        )
    return table[:, :input_count], table[:, input_count:]


def run_epoch(
    teach: TeachFn,
    inputs: Array,
    targets: Array,
    rng: np.random.Generator | None = None,
    on_sample: Optional[SampleCallback] = None,
) -> float:
    """Teach every sample once, in a fresh random order.

    Samples are processed strictly one after another so each update is
    applied before the next sample is forwarded. Returns the plain sum of the
    per-sample errors returned by ``teach``.
    """

    inputs = np.asarray(inputs, dtype=np.float64)
    if inputs.size == 0:
        return 0.0
    inputs = np.atleast_2d(inputs)
    targets = np.asarray(targets, dtype=np.float64).reshape(inputs.shape[0], -1)
    rng = rng or np.random.default_rng()
    order = rng.permutation(inputs.shape[0])

    total = 0.0
    for index in order:
        error = float(teach(inputs[index], targets[index]))
        total += error
        if on_sample is not None:
            on_sample(int(index), error)
    return total


__all__ = ["run_epoch", "split_samples"]
