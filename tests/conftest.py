import json

import jax
import numpy as np
import pytest

from tesserax.controller import PuzzleController
from tesserax.core.pieces import ARRANGEMENT_SHAPES, MiddleSliceDir
from tesserax.core.puzzle import Puzzle


def state_document(state) -> dict:
    document = {name: np.asarray(getattr(state, name)).tolist() for name in ARRANGEMENT_SHAPES}
    document["outer_slice_pos"] = int(state.outer_slice_pos)
    document["middle_slice_pos"] = int(state.middle_slice_pos)
    document["middle_slice_dir"] = MiddleSliceDir(state.middle_slice_dir).name.lower()
    return document


def write_document(path, document):
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def puzzle():
    return Puzzle()


@pytest.fixture
def rng_key():
    return jax.random.PRNGKey(42)


@pytest.fixture
def controller():
    return PuzzleController(seed=42)
