import numpy as np
import pytest

from deltanet.core.errors import ConfigurationError
from deltanet.models import load_model
from deltanet.transformers import (
    LABEL_TRANSFORMERS,
    SingleLabelTransformer,
    VectorLabelTransformer,
)

CONFIG = {
    "type": "network",
    "inputs": 2,
    "layers": [{"size": 3, "function": "sigmoid"}],
    "transformers": {"label": "single"},
}


def test_single_label_one_hot_in_label_file_order(make_model):
    root = make_model(
        "cls",
        CONFIG,
        labels="cat\ndog\nbird\n",
        train_labels="dog\nbird\ncat\ndog\n",
    )
    model = load_model("cls", root)
    transformer = model.label_transformer
    assert isinstance(transformer, SingleLabelTransformer)
    targets = transformer.transform_labels()
    assert np.array_equal(
        targets,
        [[0, 1, 0], [0, 0, 1], [1, 0, 0], [0, 1, 0]],
    )
    assert transformer.transform_output(np.array([0.1, 0.2, 0.9])) == ["bird"]
    assert model.run([0.0, 0.0])[0] in {"cat", "dog", "bird"}


def test_labels_are_read_once(make_model):
    root = make_model("memo", CONFIG, labels="yes\nno\n")
    model = load_model("memo", root)
    assert model.label_transformer.transform_output([0.0, 1.0]) == ["no"]
    model.store.path("labels").unlink()
    assert model.label_transformer.transform_output([1.0, 0.0]) == ["yes"]


def test_unknown_training_label(make_model):
    root = make_model("unk", CONFIG, labels="a\nb\n", train_labels="a\nc\n")
    model = load_model("unk", root)
    with pytest.raises(ConfigurationError, match="c"):
        model.label_transformer.transform_labels()


def test_vector_transformers(make_model):
    config = dict(CONFIG, transformers={"label": "vector"})
    root = make_model(
        "vec",
        config,
        input="0.5,0.25\n",
        train_data="1.0,2.0\n3.0,4.0\n",
        train_labels="1.0,0.0,0.0\n0.0,1.0,0.0\n",
    )
    model = load_model("vec", root)
    assert isinstance(model.label_transformer, VectorLabelTransformer)
    assert np.array_equal(model.data_transformer.transform("train-data"), [[1.0, 2.0], [3.0, 4.0]])
    assert model.label_transformer.transform_labels().shape == (2, 3)
    assert np.array_equal(model.input_transformer.transform("input"), [0.5, 0.25])
    assert model.label_transformer.transform_output(np.array([0.5, 1.0])) == ["0.5", "1.0"]
    assert len(model.run_file("input")) == 3


def test_registry_names():
    assert list(LABEL_TRANSFORMERS.names()) == ["single", "vector"]


def test_blank_label_lines_keep_output_positions(make_model):
    root = make_model(
        "gap",
        CONFIG,
        labels="cat\n\ndog\n",
        train_labels="dog\ncat\n",
    )
    model = load_model("gap", root)
    transformer = model.label_transformer
    assert transformer.transform_output(np.array([0.0, 0.1, 0.9])) == ["dog"]
    assert np.array_equal(transformer.transform_labels(), [[0, 0, 1], [1, 0, 0]])


def test_blank_training_label_is_rejected(make_model):
    root = make_model("blank", CONFIG, labels="a\nb\nc\n", train_labels="a\n\nb\n")
    model = load_model("blank", root)
    with pytest.raises(ConfigurationError, match="Blank line"):
        model.label_transformer.transform_labels()
