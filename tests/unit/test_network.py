import numpy as np
import pytest

from deltanet.core.errors import ConfigurationError, DimensionMismatchError
from deltanet.core.layer import Layer
from deltanet.models import Network, load_model

CONFIG = {
    "type": "network",
    "inputs": 2,
    "learningRate": 0.05,
    "layers": [{"size": 3, "function": "tanh"}, {"size": 2, "function": "sigmoid"}],
}


def _cost(tables, functions, inputs, targets):
    values = np.asarray(inputs, dtype=np.float64)
    for table, function in zip(tables, functions):
        values = Layer.from_state(table, function).forward(values)
    return 0.5 * float(np.sum((values - targets) ** 2))


def test_layers_chain_widths(make_model):
    root = make_model("net", CONFIG)
    model = load_model("net", root, rng=np.random.default_rng(0))
    assert isinstance(model, Network)
    assert [layer.size for layer in model.layers] == [3, 2]
    assert [layer.input_count for layer in model.layers] == [2, 3]
    assert model.process([0.1, 0.2]).shape == (2,)


def test_teach_matches_numerical_gradient(make_model):
    root = make_model("grad", CONFIG)
    model = load_model("grad", root, rng=np.random.default_rng(4))
    inputs = np.array([0.3, -0.8])
    targets = np.array([0.1, 0.9])
    functions = [layer["function"] for layer in CONFIG["layers"]]
    before = [layer.state() for layer in model.layers]

    eps = 1e-6
    numeric = []
    for idx, table in enumerate(before):
        grad = np.zeros_like(table)
        for pos in np.ndindex(table.shape):
            plus = [t.copy() for t in before]
            minus = [t.copy() for t in before]
            plus[idx][pos] += eps
            minus[idx][pos] -= eps
            grad[pos] = (
                _cost(plus, functions, inputs, targets) - _cost(minus, functions, inputs, targets)
            ) / (2 * eps)
        numeric.append(grad)

    cost = model.teach(inputs, targets)
    assert cost == pytest.approx(_cost(before, functions, inputs, targets))
    for old, layer, grad in zip(before, model.layers, numeric):
        step = (old - layer.state()) / CONFIG["learningRate"]
        assert np.allclose(step, grad, rtol=1e-4, atol=1e-8)


def test_run_epoch_reduces_cost(make_model):
    rng = np.random.default_rng(0)
    x = rng.uniform(-1.0, 1.0, size=(24, 2))
    y = np.column_stack([(x[:, 0] > 0).astype(float), (x[:, 0] <= 0).astype(float)])
    data = "\n".join(f"{float(a)!r},{float(b)!r}" for a, b in x) + "\n"
    labels = "\n".join(f"{float(a)!r},{float(b)!r}" for a, b in y) + "\n"
    config = dict(CONFIG, learningRate=0.5)
    root = make_model("epochs", config, train_data=data, train_labels=labels)
    model = load_model("epochs", root, rng=np.random.default_rng(1))
    first = model.run_epoch()
    for _ in range(40):
        last = model.run_epoch()
    assert first >= 0.0
    assert last < first


def test_save_then_load_round_trip(make_model):
    root = make_model("persist", CONFIG)
    model = load_model("persist", root, rng=np.random.default_rng(7))
    model.teach([0.5, 0.5], [1.0, 0.0])
    model.save()
    assert model.store.exists("state-0") and model.store.exists("state-1")

    again = load_model("persist", root)
    assert again.loaded
    for a, b in zip(model.layers, again.layers):
        assert np.array_equal(a.state(), b.state())
    assert np.array_equal(model.process([0.2, -0.4]), again.process([0.2, -0.4]))

    again.delete()
    assert not again.store.exists("state-0")
    assert not again.store.exists("state-1")


def test_state_with_wrong_layer_size_regenerates(make_model):
    root = make_model("resize", CONFIG, state_0="0.0,1.0,1.0\n", state_1="0.0,1.0\n")
    assert not load_model("resize", root).loaded


def test_state_with_missing_cell_regenerates(make_model):
    root = make_model(
        "holes",
        CONFIG,
        state_0="0.0,1.0,1.0\n0.0,1.0,1.0\n0.0,,1.0\n",
        state_1="0.0,1.0,1.0,1.0\n0.0,1.0,1.0,1.0\n",
    )
    model = load_model("holes", root)
    assert not model.loaded
    assert all(np.all(np.isfinite(layer.state())) for layer in model.layers)


def test_target_width_is_checked(make_model):
    root = make_model("width", CONFIG)
    model = load_model("width", root)
    with pytest.raises(DimensionMismatchError):
        model.teach([0.1, 0.2], [1.0])


def test_layers_are_required(make_model):
    root = make_model("nolayers", {"type": "network", "inputs": 2})
    with pytest.raises(ConfigurationError):
        load_model("nolayers", root)


def test_info_describes_every_layer(make_model):
    root = make_model("info", CONFIG)
    text = load_model("info", root).info()
    assert "Layer 0 (3 x 2)" in text
    assert "Layer 1 (2 x 3)" in text
