from pathlib import Path

import pytest

from py_hmmtag.model import Trainer

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def data_dir():
    return DATA_DIR


@pytest.fixture
def toy_pairs():
    return [
        ("the dog runs".split(), "det noun verb".split()),
        ("a cat sleeps".split(), "det noun verb".split()),
    ]


@pytest.fixture
def toy_trainer(toy_pairs):
    return Trainer().train(toy_pairs)


@pytest.fixture
def toy_model(toy_trainer):
    return toy_trainer.build()


@pytest.fixture
def untrained_model():
    return Trainer().build()
