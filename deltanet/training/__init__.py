"""Epoch runner and training sessions."""

from .loop import run_epoch, split_samples
from .trainer import Trainer, threshold_reached

__all__ = ["Trainer", "run_epoch", "split_samples", "threshold_reached"]
