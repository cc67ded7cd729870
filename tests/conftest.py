import json

import pytest


@pytest.fixture
def make_model(tmp_path):
    """Create ``<tmp>/models/<name>`` holding a config and text resources.

    Resource keyword names map underscores to dashes, so ``train_data=...``
    writes the ``train-data`` resource.
    """

    root = tmp_path / "models"

    def _make(name, config, **resources):
        directory = root / name
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "model.json").write_text(json.dumps(config))
        for resource, content in resources.items():
            (directory / resource.replace("_", "-")).write_text(content)
        return root

    return _make
