from typing import List

import pytest

from deltanet.training.trainer import Trainer, threshold_reached


class _ScriptedModel:
    """Model stand-in returning a fixed sequence of epoch costs."""

    def __init__(self, costs: List[float]) -> None:
        self.costs = list(costs)
        self.calls = 0

    def run_epoch(self) -> float:
        cost = self.costs[self.calls]
        self.calls += 1
        return cost


def test_threshold_predicate_is_inclusive():
    assert threshold_reached(0.5, 0.5)
    assert threshold_reached(-0.5, 0.5)
    assert not threshold_reached(0.50001, 0.5)
    assert not threshold_reached(0.0, None)


def test_stops_exactly_when_threshold_reached():
    model = _ScriptedModel([5.0, -2.0, -0.5, 0.1, 0.0])
    result = Trainer(model).run(10, threshold=0.5)
    assert model.calls == 3
    assert result.converged
    assert result.last_cost == -0.5
    assert [r.converged for r in result.history] == [False, False, True]


def test_runs_all_epochs_without_threshold():
    model = _ScriptedModel([3.0, 2.0, 1.0, 0.0])
    result = Trainer(model).run(4)
    assert result.epochs_run == 4
    assert not result.converged


def test_unbounded_epochs_run_until_threshold():
    model = _ScriptedModel([9.0, 8.0, 7.0, 0.05, 1.0])
    reports = list(Trainer(model).iter_epochs(0, threshold=0.1))
    assert len(reports) == 4
    assert reports[-1].converged


def test_unbounded_without_threshold_is_rejected():
    with pytest.raises(ValueError):
        Trainer(_ScriptedModel([])).run(0)


def test_callbacks_receive_epoch_costs_and_offset():
    events = []

    class _Sink:
        def on_epoch(self, epoch, metrics):
            events.append((epoch, metrics["cost"]))

    plain = []
    model = _ScriptedModel([1.5, 0.5])
    Trainer(model, callbacks=[_Sink(), lambda e, m: plain.append(e)]).run(2, start=10)
    assert events == [(11, 1.5), (12, 0.5)]
    assert plain == [11, 12]
