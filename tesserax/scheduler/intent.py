import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from tesserax import config
from tesserax.core.moves import Gyro, GyroMiddle, GyroOuter, Move, Rotate, RotateDirection, Turn
from tesserax.core.pieces import CellLocation
from tesserax.core.puzzle import Puzzle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyBindings:
    cells: dict = field(
        default_factory=lambda: {k: CellLocation[v] for k, v in config.CELL_KEYS.items()}
    )
    directions: dict = field(
        default_factory=lambda: {k: RotateDirection[v] for k, v in config.DIRECTION_KEYS.items()}
    )
    gyro: str = config.GYRO_KEY
    middle_slice: dict = field(default_factory=lambda: dict(config.MIDDLE_SLICE_KEYS))


class IntentDecoder:
    """
    Maps per-frame key samples to a requested move.

    Edge-triggered: a sample produces an intent only when it holds a bound key
    that was not held in the previously decoded sample, so holding a
    combination fires once and unbound keys never fire it. The scheduler
    does not decode while animating, so a key held across an animation only
    fires again after being released.
    """

    def __init__(self, bindings: Optional[KeyBindings] = None):
        self.bindings = bindings if bindings is not None else KeyBindings()
        self._bound = frozenset(
            (*self.bindings.cells, *self.bindings.directions, self.bindings.gyro,
             *self.bindings.middle_slice)
        )
        self._previous: frozenset = frozenset()

    def reset(self):
        self._previous = frozenset()

    def decode(self, keys: Iterable[str], puzzle: Optional[Puzzle] = None) -> Optional[Move]:
        held = frozenset(keys) & self._bound
        pressed = held - self._previous
        self._previous = held
        if not pressed:
            return None
        intent = self.resolve(held, puzzle)
        if intent is not None:
            logger.debug("Decoded %s from %s", intent, sorted(held))
        return intent

    def resolve(self, held: frozenset, puzzle: Optional[Puzzle] = None) -> Optional[Move]:
        """
        Level-triggered mapping from a set of held keys to a move request.

        A middle-slice shift the puzzle cannot take falls through to the
        re-orient key and then to the cell and direction keys. With several
        cells held the last in ``CellLocation`` order wins; with several
        directions, the last in binding order.
        """
        bindings = self.bindings
        shift = next(
            (loc for k, loc in bindings.middle_slice.items() if loc != 0 and k in held), None
        )
        if shift is not None and (puzzle is None or puzzle.can_gyro_middle(shift)):
            return GyroMiddle(shift)
        if any(loc == 0 and k in held for k, loc in bindings.middle_slice.items()):
            return GyroMiddle(0)

        cells = [c for k, c in bindings.cells.items() if k in held]
        cell = max(cells) if cells else None
        direction = None
        for key, d in bindings.directions.items():
            if key in held:
                direction = d
        if cell is not None:
            if bindings.gyro in held:
                return Gyro(cell)
            if direction is not None:
                return Turn(cell, direction)
            return None
        if direction is not None:
            return Rotate(direction)
        if bindings.gyro in held:
            return GyroOuter()
        return None
