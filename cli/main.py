"""Command line entry point for deltanet models."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np

from deltanet.core.errors import DeltaNetError
from deltanet.models import load_model
from deltanet.models.base import TrainableModel
from deltanet.reporting.curve import LearningCurve
from deltanet.reporting.plots import PLOT_FILENAME, PlotAdapter
from deltanet.storage import DEFAULT_ROOT
from deltanet.training.trainer import Trainer

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--model", required=True, help="Model directory name under --root")
    parser.add_argument(
        "--root", type=Path, default=DEFAULT_ROOT, help="Directory holding model folders"
    )
    parser.add_argument("--teach", action="store_true", help="Train the model")
    parser.add_argument(
        "--epochs",
        type=int,
        default=1,
        help="Epochs per round; 0 trains until the configured threshold is reached",
    )
    parser.add_argument(
        "--repeats",
        type=int,
        default=1,
        help="Training rounds; the model is saved between rounds",
    )
    parser.add_argument("--seed", type=int, help="Seed for initialisation and shuffling")
    parser.add_argument("--input", help="Input resource to run through the model")
    parser.add_argument(
        "--values", type=float, nargs="+", help="Literal input values to run through the model"
    )
    parser.add_argument("--save", action="store_true", help="Save the model when done")
    parser.add_argument(
        "--delete", action="store_true", help="Delete persisted model state and graph data"
    )
    parser.add_argument("--info", action="store_true", help="Print the model parameters")
    parser.add_argument(
        "--enable-plots", action="store_true", help="Export the learning graph as PNG"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def _print_startup_summary(model: TrainableModel, epochs: int, repeats: int) -> None:
    config = model.config
    print(f"=== deltanet model {model.name!r} ===")
    print(f"Type          : {config.type}")
    print(f"Inputs        : {config.inputs}")
    print(f"Learning rate : {config.learning_rate}")
    print(f"Threshold     : {config.threshold}")
    print(f"Epochs        : {epochs or 'until threshold'} x {repeats}")
    print(f"State         : {'loaded' if model.loaded else 'generated'}")
    print("=" * 30)


def _save(model: TrainableModel, curve: LearningCurve | None = None) -> None:
    print("Saving model...")
    if curve is not None:
        if curve.save():
            print("Saved graph data")
        else:
            print("Unable to save graph data")
    model.save()
    print("Model has been saved.")


def _delete(model: TrainableModel, curve: LearningCurve) -> None:
    print("Deleting model...")
    curve.delete()
    model.delete()
    print("Model has been deleted.")


def _teach(model: TrainableModel, args: argparse.Namespace, curve: LearningCurve) -> None:
    if args.epochs == 0 and model.config.threshold is None:
        raise SystemExit("--epochs 0 requires a threshold in the model configuration")

    if not model.loaded:
        model.save()

    offset = curve.load()
    trainer = Trainer(model, callbacks=[curve])
    plot = PlotAdapter(
        model.store.path(PLOT_FILENAME),
        title=f"{model.config.type} model \"{model.name}\" learning graph",
        enable_plots=args.enable_plots,
    )
    _print_startup_summary(model, args.epochs, args.repeats)

    epoch = offset
    for repeat in range(1, max(1, args.repeats) + 1):
        total = f"{epoch + args.epochs}" if args.epochs else "?"
        converged = False
        try:
            for report in trainer.iter_epochs(args.epochs, model.config.threshold, start=epoch):
                print(
                    f"epoch {report.epoch} / {total}... {report.seconds:.2f}s, cost {report.cost!r}"
                )
                epoch = report.epoch
                converged = report.converged
        except KeyboardInterrupt:
            print("\nTraining interrupted.")
            plot.export(curve.points)
            break
        plot.export(curve.points)
        if converged:
            print(f"Error threshold ({model.config.threshold}) reached. Finished learning.")
        if repeat < args.repeats:
            _save(model, curve)
    if args.save:
        _save(model, curve)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    rng = np.random.default_rng(args.seed) if args.seed is not None else None
    try:
        model = load_model(args.model, args.root, rng=rng)
    except (DeltaNetError, OSError, ValueError) as exc:
        print(exc)
        raise SystemExit(1) from None

    curve = LearningCurve(model.store)

    if args.teach:
        _teach(model, args, curve)
    elif args.save:
        _save(model)

    try:
        if args.values is not None:
            print("\n".join(model.run(args.values)))
        if args.input:
            if not model.store.exists(args.input):
                print(f"Input file {str(model.store.path(args.input))!r} doesn't exist")
                raise SystemExit(1)
            print("\n".join(model.run_file(args.input)))
    except DeltaNetError as exc:
        print(exc)
        raise SystemExit(1) from None

    if args.info:
        print("Model info:")
        print("===========")
        print(model.info())

    if args.delete:
        _delete(model, curve)


if __name__ == "__main__":
    main(sys.argv[1:])
