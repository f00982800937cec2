from collections import Counter

import jax.numpy as jnp
import numpy as np

from tesserax.core.pieces import (
    ARRANGEMENT_SHAPES,
    EMPTY,
    HYPERCUBE_SHAPE,
    CellLocation,
    MiddleSliceDir,
    cell_stickers,
    exposure_mask,
    from_hypercube,
    piece_color_sets,
    rotate_block,
    solved_hypercube,
    solved_state,
    state_to_string,
    to_hypercube,
)
from tesserax.utils.util import states_equal


def test_solved_state_shapes():
    state = solved_state()
    for name, shape in ARRANGEMENT_SHAPES.items():
        assert getattr(state, name).shape == shape, f"{name} shape mismatch"
    assert state.outer_slice_pos == 1
    assert state.middle_slice_pos == 0
    assert state.middle_slice_dir == MiddleSliceDir.FRONT


def test_hypercube_round_trip():
    state = solved_state()
    hyper = to_hypercube(state)
    assert hyper.shape == HYPERCUBE_SHAPE
    assert jnp.array_equal(hyper, solved_hypercube())
    rebuilt = from_hypercube(hyper, state.outer_slice_pos, state.middle_slice_pos, state.middle_slice_dir)
    assert states_equal(rebuilt, state)


def test_right_cell_is_mirrored():
    state = solved_state()
    # physical x=0 of the right cell touches the inner slice
    assert np.all(np.asarray(state.right_cell)[0, ..., 1] == int(CellLocation.IN))
    assert np.all(np.asarray(state.left_cell)[2, ..., 1] == int(CellLocation.IN))


def test_exposure_matches_solved_labels():
    hyper = np.asarray(solved_hypercube())
    assert np.array_equal(hyper != EMPTY, exposure_mask())
    # hidden core
    assert np.all(hyper[1, 1, 1, 1] == EMPTY)


def test_piece_and_label_counts():
    hyper = solved_hypercube()
    pieces = piece_color_sets(hyper)
    assert len(pieces) == 80
    sizes = Counter(len(p) for p in pieces)
    assert sizes == {1: 8, 2: 24, 3: 32, 4: 16}
    labels = Counter(int(v) for v in np.asarray(hyper).ravel() if v != EMPTY)
    assert labels == {int(cell): 27 for cell in CellLocation}


def test_cell_stickers_uniform_when_solved():
    hyper = solved_hypercube()
    for cell in CellLocation:
        stickers = cell_stickers(hyper, cell)
        assert stickers.shape == (3, 3, 3)
        assert jnp.all(stickers == int(cell)), f"{cell.name} is not uniform"


def test_cell_location_pairs():
    for cell in CellLocation:
        assert cell.opposite.opposite == cell
        assert cell.opposite.axis == cell.axis
        assert cell.opposite.sign == -cell.sign
    assert CellLocation.LEFT.opposite == CellLocation.RIGHT
    assert CellLocation.IN.opposite == CellLocation.OUT


def test_rotate_block_quarter_turn():
    hyper = solved_hypercube()
    block = hyper[0]
    turned = rotate_block(block, (1, 2), (2, 3))
    assert not jnp.array_equal(turned, block)
    for _ in range(3):
        turned = rotate_block(turned, (1, 2), (2, 3))
    assert jnp.array_equal(turned, block)


def test_rotate_block_keeps_exposure():
    hyper = solved_hypercube()
    turned = rotate_block(hyper, (0, 3), (0, 3))
    assert np.array_equal(np.asarray(turned) != EMPTY, exposure_mask())


def test_state_to_string_lists_every_cell():
    text = state_to_string(solved_state())
    for cell in CellLocation:
        assert cell.name.lower() in text
    assert "outer slice: +1" in text
