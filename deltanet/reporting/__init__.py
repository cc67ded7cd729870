"""Reporting utilities for deltanet."""

from .curve import LearningCurve
from .plots import PlotAdapter

__all__ = ["LearningCurve", "PlotAdapter"]
