"""Headless-safe learning-graph export."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Tuple

logger = logging.getLogger(__name__)

PLOT_FILENAME = "learning-graph.png"


class PlotAdapter:
    """Render an epoch/cost curve with matplotlib when plots are enabled."""

    def __init__(self, path: str | Path, title: str = "Learning graph", enable_plots: bool = True):
        self.path = Path(path)
        self.title = title
        self.enable_plots = enable_plots

    def export(self, points: Sequence[Tuple[int, float]]) -> bool:
        """Write the figure; return ``False`` when nothing was written."""

        if not self.enable_plots or not points:
            return False
        try:
            import matplotlib

            matplotlib.use("Agg", force=True)
            import matplotlib.pyplot as plt  # imported lazily for headless safety

            epochs, costs = zip(*points)
            fig, ax = plt.subplots()
            ax.plot(epochs, costs)
            ax.set_xlabel("Epochs")
            ax.set_ylabel("Cost")
            ax.set_xlim(left=1)
            ax.set_title(self.title)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(self.path)
            plt.close(fig)
        except (OSError, ValueError, RuntimeError) as exc:
            logger.warning("Unable to export learning graph to %s: %s", self.path, exc)
            return False
        return True


__all__ = ["PLOT_FILENAME", "PlotAdapter"]
