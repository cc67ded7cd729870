"""Learning-curve history persisted next to the model."""

from __future__ import annotations

import logging
from typing import List, Mapping, Tuple

import numpy as np

from ..storage import ModelStore

logger = logging.getLogger(__name__)

GRAPH_RESOURCE = "graph"


class LearningCurve:
    """Collect one cost per epoch and keep it in the ``graph`` resource.

    Reading and writing the curve never interrupts training: failures are
    logged and the in-memory history is kept.
    """

    def __init__(self, store: ModelStore, resource: str = GRAPH_RESOURCE) -> None:
        self.store = store
        self.resource = resource
        self.points: List[Tuple[int, float]] = []

    def __len__(self) -> int:
        return len(self.points)

    @property
    def costs(self) -> List[float]:
        return [cost for _, cost in self.points]

    def load(self) -> int:
        """Replace the history with the stored curve; return its length."""

        if not self.store.exists(self.resource):
            self.points = []
            return 0
        try:
            table = self.store.read_table(self.resource)
        except (OSError, ValueError) as exc:
            logger.warning("Unable to read graph data from %s: %s", self.store.path(self.resource), exc)
            self.points = []
            return 0
        self.points = [(idx + 1, float(row[0])) for idx, row in enumerate(table)]
        return len(self.points)

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        self.points.append((int(epoch), float(metrics.get("cost", 0.0))))

    __call__ = on_epoch

    def save(self) -> bool:
        if not self.points:
            return False
        try:
            self.store.write_table(self.resource, np.asarray(self.costs).reshape(-1, 1))
        except OSError as exc:
            logger.warning("Unable to save graph data: %s", exc)
            return False
        return True

    def delete(self) -> bool:
        try:
            return self.store.delete(self.resource)
        except OSError as exc:
            logger.warning("Unable to delete graph data: %s", exc)
            return False


__all__ = ["GRAPH_RESOURCE", "LearningCurve"]
