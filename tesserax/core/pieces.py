from enum import IntEnum

import chex
import jax.numpy as jnp
import numpy as np
from tabulate import tabulate

from tesserax.utils.util import coloring_str

TYPE = jnp.int8
EMPTY = -1

# hypercube axes / label slots
AXIS_A = 0  # left -> right
AXIS_B = 1  # out -> in
AXIS_Y = 2  # down -> up
AXIS_Z = 3  # back -> front
NUM_AXES = 4
HYPERCUBE_SHAPE = (3, 3, 3, 3, NUM_AXES)


class CellLocation(IntEnum):
    IN = 0
    OUT = 1
    RIGHT = 2
    LEFT = 3
    UP = 4
    DOWN = 5
    FRONT = 6
    BACK = 7

    @property
    def opposite(self) -> "CellLocation":
        return CellLocation(self.value ^ 1)

    @property
    def axis(self) -> int:
        return _CELL_AXIS[self]

    @property
    def sign(self) -> int:
        return 1 if self.value % 2 == 0 else -1

    @property
    def symbol(self) -> str:
        return self.name[0]


class MiddleSliceDir(IntEnum):
    FRONT = 0
    UP = 1

    @property
    def toggled(self) -> "MiddleSliceDir":
        return MiddleSliceDir(1 - self.value)


_CELL_AXIS = {
    CellLocation.IN: AXIS_B,
    CellLocation.OUT: AXIS_B,
    CellLocation.RIGHT: AXIS_A,
    CellLocation.LEFT: AXIS_A,
    CellLocation.UP: AXIS_Y,
    CellLocation.DOWN: AXIS_Y,
    CellLocation.FRONT: AXIS_Z,
    CellLocation.BACK: AXIS_Z,
}

rgb_map = {
    CellLocation.IN: (160, 32, 240),  # purple
    CellLocation.OUT: (255, 105, 180),  # pink
    CellLocation.RIGHT: (255, 0, 0),  # red
    CellLocation.LEFT: (255, 128, 0),  # orange
    CellLocation.UP: (255, 255, 255),  # white
    CellLocation.DOWN: (255, 255, 0),  # yellow
    CellLocation.FRONT: (0, 255, 0),  # green
    CellLocation.BACK: (0, 0, 255),  # blue
}


def cell_at(axis: int, sign: int) -> CellLocation:
    for cell, cell_axis in _CELL_AXIS.items():
        if cell_axis == axis and cell.sign == sign:
            return cell
    raise ValueError(f"No cell on axis {axis} with sign {sign}")


@chex.dataclass(frozen=True)
class PuzzleState:
    """
    Full arrangement of the 3to4 puzzle.

    Every piece is a row of four label slots ``(A, B, Y, Z)``; a slot holds a
    colour exactly when the piece sits off-centre on that axis, otherwise it is
    ``EMPTY``. Cells are stored in their physical ``[x][y][z]`` frame: the left
    cell's x runs along B, the right cell is mirrored so its x runs along -B.
    Slices are ``[y][z]`` grids and ``front`` / ``back`` are indexed by ``y + 1``.
    """

    left_cell: chex.Array
    right_cell: chex.Array
    inner_slice: chex.Array
    outer_slice: chex.Array
    top: chex.Array
    bottom: chex.Array
    front: chex.Array
    back: chex.Array
    outer_slice_pos: int
    middle_slice_pos: int
    middle_slice_dir: int


ARRANGEMENT_SHAPES = {
    "left_cell": (3, 3, 3, NUM_AXES),
    "right_cell": (3, 3, 3, NUM_AXES),
    "inner_slice": (3, 3, NUM_AXES),
    "outer_slice": (3, 3, NUM_AXES),
    "top": (NUM_AXES,),
    "bottom": (NUM_AXES,),
    "front": (3, NUM_AXES),
    "back": (3, NUM_AXES),
}


def exposure_mask() -> np.ndarray:
    """Boolean ``HYPERCUBE_SHAPE`` mask, True where a label slot is exposed."""
    mask = np.zeros(HYPERCUBE_SHAPE, dtype=bool)
    for index in np.ndindex(*HYPERCUBE_SHAPE[:-1]):
        for slot in range(NUM_AXES):
            mask[index + (slot,)] = index[slot] != 1
    return mask


def solved_hypercube() -> chex.Array:
    hyper = np.full(HYPERCUBE_SHAPE, EMPTY, dtype=np.int8)
    for slot in range(NUM_AXES):
        for index, sign in ((0, -1), (2, 1)):
            selector = [slice(None)] * NUM_AXES
            selector[slot] = index
            hyper[tuple(selector) + (slot,)] = int(cell_at(slot, sign))
    return jnp.asarray(hyper, dtype=TYPE)


def to_hypercube(state: PuzzleState) -> chex.Array:
    """Assemble the ``[A][B][Y][Z][slot]`` view of all 81 positions."""
    middle = jnp.full((3, 3, NUM_AXES), EMPTY, dtype=TYPE)
    middle = middle.at[:, 2].set(state.front)
    middle = middle.at[:, 0].set(state.back)
    middle = middle.at[2, 1].set(state.top)
    middle = middle.at[0, 1].set(state.bottom)
    centre_layer = jnp.stack([state.outer_slice, middle, state.inner_slice], axis=0)
    return jnp.stack(
        [state.left_cell, centre_layer, jnp.flip(state.right_cell, axis=0)], axis=0
    )


def from_hypercube(
    hyper: chex.Array,
    outer_slice_pos: int,
    middle_slice_pos: int,
    middle_slice_dir: int,
) -> PuzzleState:
    middle = hyper[1, 1]
    return PuzzleState(
        left_cell=hyper[0],
        right_cell=jnp.flip(hyper[2], axis=0),
        inner_slice=hyper[1, 2],
        outer_slice=hyper[1, 0],
        top=middle[2, 1],
        bottom=middle[0, 1],
        front=middle[:, 2],
        back=middle[:, 0],
        outer_slice_pos=int(outer_slice_pos),
        middle_slice_pos=int(middle_slice_pos),
        middle_slice_dir=int(middle_slice_dir),
    )


def solved_state() -> PuzzleState:
    return from_hypercube(solved_hypercube(), 1, 0, MiddleSliceDir.FRONT)


def rotate_block(block: chex.Array, axes: tuple[int, int], slots: tuple[int, int]) -> chex.Array:
    """
    Quarter-turn ``block`` carrying its ``+axes[0]`` side onto ``+axes[1]``.
    Positions rotate with ``jnp.rot90`` and the two label slots of the
    rotation plane trade places, so every sticker keeps facing outward.
    """
    first, second = slots
    perm = list(range(NUM_AXES))
    perm[first], perm[second] = second, first
    rotated = jnp.rot90(block, 1, axes=axes)
    return rotated[..., jnp.asarray(perm)]


def cell_stickers(hyper: chex.Array, cell: CellLocation) -> chex.Array:
    """3x3x3 grid of the colours showing on ``cell``."""
    index = 2 if cell.sign > 0 else 0
    return jnp.take(hyper, index, axis=cell.axis)[..., cell.axis]


def piece_color_sets(hyper: chex.Array) -> list[tuple[int, ...]]:
    host = np.asarray(hyper)
    mask = exposure_mask()
    pieces = []
    for index in np.ndindex(*HYPERCUBE_SHAPE[:-1]):
        if not mask[index].any():
            continue
        pieces.append(tuple(sorted(int(v) for v in host[index] if v != EMPTY)))
    return pieces


def _format_sticker(value: int) -> str:
    if value == EMPTY:
        return "·"
    return coloring_str("■", rgb_map[CellLocation(value)])


def _cell_string(hyper: chex.Array, cell: CellLocation) -> str:
    stickers = np.asarray(cell_stickers(hyper, cell))
    title = cell.name.lower()
    width = 19
    string = f"┏━{title.center(width, '━')}━┓\n"
    for row in range(3):
        layers = []
        for layer in range(3):
            layers.append(" ".join(_format_sticker(v) for v in stickers[layer, row]))
        string += f"┃ {'  '.join(layers).ljust(width)} ┃\n"
    string += f"┗━{'━' * width}━┛"
    return string


def state_to_string(state: PuzzleState) -> str:
    hyper = to_hypercube(state)
    legend = "\n".join(
        f"{cell.name.lower():<6}:{coloring_str('■', rgb_map[cell])}" for cell in CellLocation
    )
    scalars = (
        f"outer slice: {state.outer_slice_pos:+d}\n"
        f"middle slice: {state.middle_slice_pos:+d}\n"
        f"middle dir: {MiddleSliceDir(state.middle_slice_dir).name.lower()}"
    )
    table = [
        [legend, _cell_string(hyper, CellLocation.UP), scalars],
        [
            _cell_string(hyper, CellLocation.LEFT),
            _cell_string(hyper, CellLocation.IN),
            _cell_string(hyper, CellLocation.RIGHT),
            _cell_string(hyper, CellLocation.OUT),
        ],
        [
            _cell_string(hyper, CellLocation.BACK),
            _cell_string(hyper, CellLocation.DOWN),
            _cell_string(hyper, CellLocation.FRONT),
        ],
    ]
    return tabulate(table, tablefmt="plain", rowalign="center")
