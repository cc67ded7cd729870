"""Epoch-driven training sessions with threshold stopping and callbacks."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Iterator, Mapping, Optional, Sequence

from ..core.types import EpochReport, TrainResult

if TYPE_CHECKING:  # pragma: no cover
    from ..models.base import TrainableModel

logger = logging.getLogger(__name__)


def threshold_reached(cost: float, threshold: Optional[float]) -> bool:
    """Return ``True`` exactly when ``abs(cost) <= threshold``."""

    return threshold is not None and abs(cost) <= threshold


class Trainer:
    """Run repeated online epochs on one model.

    Weight updates persist in the model between epochs; the trainer itself
    only keeps the epoch counter of the current session.
    """

    def __init__(
        self,
        model: "TrainableModel",
        callbacks: Sequence[object] | None = None,
    ) -> None:
        self.model = model
        self.callbacks = list(callbacks or [])

    def iter_epochs(
        self,
        epochs: int,
        threshold: Optional[float] = None,
        *,
        start: int = 0,
    ) -> Iterator[EpochReport]:
        """Yield one report per epoch.

        ``epochs == 0`` runs until the threshold is reached. Epoch numbers
        continue from ``start`` so a resumed learning curve stays contiguous.
        """

        if epochs < 0:
            raise ValueError(f"epochs must be >= 0, got {epochs}")
        epoch = start
        while epochs == 0 or epoch < start + epochs:
            epoch += 1
            started = time.perf_counter()
            cost = float(self.model.run_epoch())
            seconds = time.perf_counter() - started
            converged = threshold_reached(cost, threshold)
            report = EpochReport(epoch=epoch, cost=cost, seconds=seconds, converged=converged)
            logger.debug("epoch %d cost %r (%.3fs)", epoch, cost, seconds)
            self._emit_epoch(epoch, {"cost": cost, "seconds": seconds})
            yield report
            if converged:
                logger.info("Error threshold (%s) reached after epoch %d", threshold, epoch)
                return

    def run(
        self,
        epochs: int,
        threshold: Optional[float] = None,
        *,
        start: int = 0,
    ) -> TrainResult:
        if epochs == 0 and threshold is None:
            raise ValueError("Unbounded training needs a threshold; use iter_epochs to drive it manually")
        history = list(self.iter_epochs(epochs, threshold, start=start))
        return TrainResult(
            epochs_run=len(history),
            last_cost=history[-1].cost if history else None,
            converged=bool(history and history[-1].converged),
            history=history,
        )

    def _emit_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        for callback in self.callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(epoch, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(epoch, metrics)


__all__ = ["Trainer", "threshold_reached"]
