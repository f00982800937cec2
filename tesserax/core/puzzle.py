import logging
from typing import Iterable, Optional

import jax.numpy as jnp
import numpy as np

from tesserax.core.moves import (
    Gyro,
    GyroMiddle,
    GyroOuter,
    Move,
    MoveType,
    Rotate,
    RotateDirection,
    Turn,
)
from tesserax.core.pieces import (
    AXIS_A,
    AXIS_B,
    AXIS_Y,
    AXIS_Z,
    NUM_AXES,
    CellLocation,
    MiddleSliceDir,
    PuzzleState,
    from_hypercube,
    rotate_block,
    solved_state,
    state_to_string,
    to_hypercube,
)

logger = logging.getLogger(__name__)

# whole-hypercube plane carrying each cell into the IN position
GYRO_PLANES = {
    CellLocation.LEFT: (AXIS_B, AXIS_A),
    CellLocation.RIGHT: (AXIS_A, AXIS_B),
    CellLocation.UP: (AXIS_Y, AXIS_B),
    CellLocation.DOWN: (AXIS_B, AXIS_Y),
    CellLocation.FRONT: (AXIS_Z, AXIS_B),
    CellLocation.BACK: (AXIS_B, AXIS_Z),
}

# label slot for each physical axis of a block
_SIDE_CELL_SLOTS = (AXIS_B, AXIS_Y, AXIS_Z)
_END_CELL_SLOTS = (AXIS_A, AXIS_Y, AXIS_Z)

_X_AXIS_DIRECTIONS = (RotateDirection.YZ, RotateDirection.ZY)


def _ring_vector(middle_pos: int, outer_pos: int) -> tuple[int, int]:
    """(A, B) direction of the ring slot the middle slice is docked on."""
    if middle_pos == 2 * outer_pos:
        return (0, -1)
    return {-1: (-1, 0), 0: (0, 1), 1: (1, 0)}[middle_pos]


def _ring_position(vector: tuple[int, int], outer_pos: int) -> int:
    if vector == (0, -1):
        return 2 * outer_pos
    return {(-1, 0): -1, (0, 1): 0, (1, 0): 1}[vector]


class Puzzle:
    """
    Combinatorial engine of the 3to4 puzzle.

    Owns the current ``PuzzleState`` and replaces it on every effect. Each
    effect has a paired ``can_*`` predicate; callers check the predicate first
    and the effect asserts it.

    Middle slice docking (``middle_slice_pos``): -1 left cell centre layer,
    0 inner slice, +1 right cell centre layer, ``2 * outer_slice_pos`` outer
    slice. ``-2 * outer_slice_pos`` is never reachable.
    """

    def __init__(self, state: Optional[PuzzleState] = None):
        self._state = state if state is not None else solved_state()

    @property
    def state(self) -> PuzzleState:
        return self._state

    @property
    def outer_slice_pos(self) -> int:
        return self._state.outer_slice_pos

    @property
    def middle_slice_pos(self) -> int:
        return self._state.middle_slice_pos

    @property
    def middle_slice_dir(self) -> MiddleSliceDir:
        return MiddleSliceDir(self._state.middle_slice_dir)

    def reset(self):
        self._state = solved_state()

    def load_state(self, state: PuzzleState):
        self._state = state

    def _replace(self, hyper=None, **scalars):
        current = self._state
        if hyper is None:
            self._state = current.replace(**scalars)
            return
        self._state = from_hypercube(
            hyper,
            scalars.get("outer_slice_pos", current.outer_slice_pos),
            scalars.get("middle_slice_pos", current.middle_slice_pos),
            scalars.get("middle_slice_dir", current.middle_slice_dir),
        )

    # Predicates

    def can_rotate_cell(self, cell: CellLocation, direction: RotateDirection) -> bool:
        cell = CellLocation(cell)
        if cell in (CellLocation.IN, CellLocation.OUT):
            return direction in _X_AXIS_DIRECTIONS
        if cell in (CellLocation.LEFT, CellLocation.RIGHT):
            if direction in _X_AXIS_DIRECTIONS:
                return True
            # a docked middle slice is carried off by a tilting turn
            docked = -1 if cell == CellLocation.LEFT else 1
            return self.middle_slice_pos != docked
        return False

    def can_rotate_puzzle(self, direction: RotateDirection) -> bool:
        return direction in _X_AXIS_DIRECTIONS

    def can_gyro_cell(self, cell: CellLocation) -> bool:
        cell = CellLocation(cell)
        if cell in (CellLocation.LEFT, CellLocation.RIGHT):
            return True
        if cell in (CellLocation.IN, CellLocation.OUT):
            return False
        needed = (
            MiddleSliceDir.UP
            if cell in (CellLocation.UP, CellLocation.DOWN)
            else MiddleSliceDir.FRONT
        )
        return self.middle_slice_dir == needed and self.middle_slice_pos == self.outer_slice_pos

    def can_gyro_outer_slice(self) -> bool:
        return True

    def can_gyro_middle(self, direction: int) -> bool:
        if direction == 0:
            return True
        target = self.middle_slice_pos + direction
        return -2 <= target <= 2 and target != -2 * self.outer_slice_pos

    def can_apply(self, move: Move) -> bool:
        if isinstance(move, Turn):
            return self.can_rotate_cell(move.cell, move.direction)
        if isinstance(move, Rotate):
            return self.can_rotate_puzzle(move.direction)
        if isinstance(move, Gyro):
            return self.can_gyro_cell(move.cell)
        if isinstance(move, GyroOuter):
            return self.can_gyro_outer_slice()
        if isinstance(move, GyroMiddle):
            return self.can_gyro_middle(move.location)
        raise TypeError(f"Unknown move type: {type(move).__name__}")

    # Effects

    def rotate_cell(self, cell: CellLocation, direction: RotateDirection):
        assert self.can_rotate_cell(cell, direction), f"Illegal turn {cell.name} {direction.name}"
        first, second = direction.value
        hyper = to_hypercube(self._state)
        if cell in (CellLocation.LEFT, CellLocation.RIGHT):
            index = 0 if cell == CellLocation.LEFT else 2
            block = hyper[index]
            if cell == CellLocation.RIGHT:
                block = jnp.flip(block, axis=0)
            block = rotate_block(
                block, (first, second), (_SIDE_CELL_SLOTS[first], _SIDE_CELL_SLOTS[second])
            )
            if cell == CellLocation.RIGHT:
                block = jnp.flip(block, axis=0)
            hyper = hyper.at[index].set(block)
        else:
            index = 2 if cell == CellLocation.IN else 0
            block = rotate_block(
                hyper[:, index],
                (first, second),
                (_END_CELL_SLOTS[first], _END_CELL_SLOTS[second]),
            )
            hyper = hyper.at[:, index].set(block)
        self._replace(hyper)

    def rotate_puzzle(self, direction: RotateDirection):
        assert self.can_rotate_puzzle(direction), f"Illegal puzzle rotation {direction.name}"
        first, second = direction.value
        plane = (_END_CELL_SLOTS[first], _END_CELL_SLOTS[second])
        hyper = rotate_block(to_hypercube(self._state), plane, plane)
        self._replace(hyper, middle_slice_dir=self.middle_slice_dir.toggled)

    def gyro_cell(self, cell: CellLocation):
        """Carry ``cell`` into the IN position, moving the outer slice to the other end."""
        assert self.can_gyro_cell(cell), f"Illegal gyro {cell.name}"
        plane = GYRO_PLANES[cell]
        hyper = rotate_block(to_hypercube(self._state), plane, plane)
        outer_pos = self.outer_slice_pos
        if cell in (CellLocation.LEFT, CellLocation.RIGHT):
            vector = _ring_vector(self.middle_slice_pos, outer_pos)
            rotated = [0, 0]
            rotated[plane[1]] = vector[plane[0]]
            rotated[plane[0]] = -vector[plane[1]]
            middle_pos = _ring_position(tuple(rotated), -outer_pos)
        else:
            middle_pos = -self.middle_slice_pos
        self._replace(hyper, outer_slice_pos=-outer_pos, middle_slice_pos=middle_pos)

    def gyro_outer_slice(self):
        outer_pos = self.outer_slice_pos
        middle_pos = self.middle_slice_pos
        if middle_pos == 2 * outer_pos:
            middle_pos = -middle_pos
        self._replace(outer_slice_pos=-outer_pos, middle_slice_pos=middle_pos)

    def gyro_middle_slice(self, location: int):
        assert self.can_gyro_middle(location), f"Illegal middle slice move {location}"
        if location == 0:
            self._replace(middle_slice_dir=int(self.middle_slice_dir.toggled))
            return
        middle_pos = max(-2, min(2, self.middle_slice_pos + location))
        self._replace(middle_slice_pos=middle_pos)

    def apply_move(self, move: Move):
        if isinstance(move, Turn):
            self.rotate_cell(move.cell, move.direction)
        elif isinstance(move, Rotate):
            self.rotate_puzzle(move.direction)
        elif isinstance(move, Gyro):
            self.gyro_cell(move.cell)
        elif isinstance(move, GyroOuter):
            self.gyro_outer_slice()
        elif isinstance(move, GyroMiddle):
            self.gyro_middle_slice(move.location)
        else:
            raise TypeError(f"Unknown move type: {type(move).__name__}")
        logger.debug("Applied %s", move)

    def legal_moves(self, families: Optional[Iterable[MoveType]] = None) -> list[Move]:
        families = set(MoveType) if families is None else set(families)
        candidates: list[Move] = []
        if MoveType.TURN in families:
            candidates += [Turn(c, d) for c in CellLocation for d in RotateDirection]
        if MoveType.ROTATE in families:
            candidates += [Rotate(d) for d in RotateDirection]
        if MoveType.GYRO in families:
            candidates += [Gyro(c) for c in CellLocation]
        if MoveType.GYRO_OUTER in families:
            candidates.append(GyroOuter())
        if MoveType.GYRO_MIDDLE in families:
            candidates += [GyroMiddle(loc) for loc in (-1, 0, 1)]
        return [move for move in candidates if self.can_apply(move)]

    def is_solved(self) -> bool:
        """Every cell shows a single colour, whatever the overall orientation."""
        hyper = np.asarray(to_hypercube(self._state))
        for axis in range(NUM_AXES):
            for index in (0, 2):
                stickers = np.take(hyper, index, axis=axis)[..., axis]
                if np.unique(stickers).size != 1:
                    return False
        return True

    def __str__(self):
        return state_to_string(self._state)
