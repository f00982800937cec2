"""
Puzzle document loading.

A puzzle document is a JSON object holding every ``PuzzleState`` arrangement
field as nested integer lists (``-1`` for unexposed slots) plus the three
positional scalars::

    {
        "left_cell": [...], "right_cell": [...],
        "inner_slice": [...], "outer_slice": [...],
        "top": [...], "bottom": [...], "front": [...], "back": [...],
        "outer_slice_pos": 1, "middle_slice_pos": 0, "middle_slice_dir": "front"
    }

Nothing is accepted unless every shape matches, every piece shows exactly
the slots its position exposes, and the pieces' colour sets are a
permutation of the solved ones.
"""
import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any, Union

import jax.numpy as jnp
import numpy as np

from tesserax.core.pieces import (
    ARRANGEMENT_SHAPES,
    EMPTY,
    TYPE,
    CellLocation,
    MiddleSliceDir,
    PuzzleState,
    exposure_mask,
    piece_color_sets,
    solved_hypercube,
    to_hypercube,
)

logger = logging.getLogger(__name__)

SCALAR_FIELDS = ("outer_slice_pos", "middle_slice_pos", "middle_slice_dir")
_DIRECTION_NAMES = {d.name.lower(): d for d in MiddleSliceDir}


class ArrangementError(ValueError):
    """A puzzle document that does not describe a reachable arrangement."""


def _parse_array(name: str, raw: Any) -> np.ndarray:
    try:
        array = np.asarray(raw)
    except ValueError as exc:
        raise ArrangementError(f"Field '{name}' is not a rectangular array.") from exc
    expected = ARRANGEMENT_SHAPES[name]
    if array.shape != expected:
        raise ArrangementError(f"Field '{name}' has shape {array.shape}, expected {expected}.")
    if not np.issubdtype(array.dtype, np.integer):
        raise ArrangementError(f"Field '{name}' must hold integers, got {array.dtype}.")
    if array.min() < EMPTY or array.max() >= len(CellLocation):
        raise ArrangementError(
            f"Field '{name}' holds labels outside [{EMPTY}, {len(CellLocation) - 1}]."
        )
    return array


def _parse_scalars(document: dict) -> tuple[int, int, MiddleSliceDir]:
    outer_pos = document["outer_slice_pos"]
    middle_pos = document["middle_slice_pos"]
    direction = document["middle_slice_dir"]
    if isinstance(outer_pos, bool) or not isinstance(outer_pos, int) or outer_pos not in (-1, 1):
        raise ArrangementError(f"outer_slice_pos must be -1 or 1, got {outer_pos!r}.")
    if isinstance(middle_pos, bool) or not isinstance(middle_pos, int) or not -2 <= middle_pos <= 2:
        raise ArrangementError(f"middle_slice_pos must be an integer in [-2, 2], got {middle_pos!r}.")
    if middle_pos == -2 * outer_pos:
        raise ArrangementError(
            f"middle_slice_pos {middle_pos} is unreachable with outer_slice_pos {outer_pos}."
        )
    if not isinstance(direction, str) or direction.lower() not in _DIRECTION_NAMES:
        raise ArrangementError(
            f"middle_slice_dir must be one of {sorted(_DIRECTION_NAMES)}, got {direction!r}."
        )
    return outer_pos, middle_pos, _DIRECTION_NAMES[direction.lower()]


def parse_document(document: Any) -> PuzzleState:
    """Validate an already-deserialized document and build the state it describes."""
    if not isinstance(document, dict):
        raise ArrangementError(f"Expected a JSON object, got {type(document).__name__}.")
    missing = [k for k in (*ARRANGEMENT_SHAPES, *SCALAR_FIELDS) if k not in document]
    if missing:
        raise ArrangementError(f"Missing fields: {', '.join(missing)}.")

    arrays = {name: _parse_array(name, document[name]) for name in ARRANGEMENT_SHAPES}
    outer_pos, middle_pos, direction = _parse_scalars(document)
    state = PuzzleState(
        **{name: jnp.asarray(array, dtype=TYPE) for name, array in arrays.items()},
        outer_slice_pos=outer_pos,
        middle_slice_pos=middle_pos,
        middle_slice_dir=int(direction),
    )

    hyper = to_hypercube(state)
    exposed = np.asarray(hyper) != EMPTY
    if not np.array_equal(exposed, exposure_mask()):
        raise ArrangementError("Some pieces show labels on hidden facets or lack exposed ones.")
    if Counter(piece_color_sets(hyper)) != Counter(piece_color_sets(solved_hypercube())):
        raise ArrangementError("Piece colours are not a permutation of the solved puzzle.")
    return state


def load_state(path: Union[str, Path]) -> PuzzleState:
    """
    Read and validate a puzzle document.

    Raises:
        OSError: the file cannot be read.
        ArrangementError: the content is not valid JSON or not a valid arrangement.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        try:
            document = json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ArrangementError(f"{path.name} is not valid UTF-8 JSON: {exc}") from exc
    state = parse_document(document)
    logger.info("Loaded puzzle document %s", path)
    return state
