import logging
from collections import deque
from typing import Iterable, Optional

from tesserax import config
from tesserax.core.history import MoveHistory
from tesserax.core.moves import Gyro, GyroMiddle, GyroOuter, Move
from tesserax.core.pieces import CellLocation, MiddleSliceDir
from tesserax.core.puzzle import Puzzle
from tesserax.scheduler.intent import IntentDecoder

logger = logging.getLogger(__name__)


def build_gyro_sequence(
    outer_pos: int, middle_pos: int, middle_dir: MiddleSliceDir, cell: CellLocation
) -> list[Move]:
    """
    Expand a gyro request into the primitive moves that make it legal, in
    commit order. UP / DOWN / FRONT / BACK gyros first re-orient the middle
    slice, then bring it next to the outer slice (by shifting it, or by
    moving the outer slice) before the gyro itself. IN / OUT cannot gyrate.
    """
    cell = CellLocation(cell)
    if cell in (CellLocation.LEFT, CellLocation.RIGHT):
        return [Gyro(cell)]
    if cell in (CellLocation.IN, CellLocation.OUT):
        return []

    needed = MiddleSliceDir.UP if cell in (CellLocation.UP, CellLocation.DOWN) else MiddleSliceDir.FRONT
    sequence: list[Move] = []
    if MiddleSliceDir(middle_dir) != needed:
        sequence.append(GyroMiddle(0))
    if middle_pos == 0:
        sequence.append(GyroMiddle(outer_pos))
    elif middle_pos == 2 * outer_pos:
        sequence.append(GyroMiddle(-outer_pos))
    elif middle_pos == -outer_pos:
        sequence.append(GyroOuter())
    sequence.append(Gyro(cell))
    return sequence


class MoveScheduler:
    """
    FIFO animation sequencer.

    ``tick`` is the only place a queued move reaches the puzzle: once the
    animation progress of the front entry passes its ``anim_length`` the
    move is applied and recorded. At most one entry commits per tick and any
    progress beyond the committing entry's length is dropped. Input is only
    decoded while nothing is animating.
    """

    def __init__(
        self,
        puzzle: Puzzle,
        history: MoveHistory,
        decoder: Optional[IntentDecoder] = None,
        animation_speed: float = config.ANIMATION_SPEED,
    ):
        if animation_speed <= 0:
            raise ValueError(f"animation_speed must be positive, got {animation_speed}")
        self.puzzle = puzzle
        self.history = history
        self.decoder = decoder if decoder is not None else IntentDecoder()
        self.animation_speed = animation_speed
        self._pending: deque = deque()
        self._animating = False
        self._progress = 0.0

    @property
    def animating(self) -> bool:
        return self._animating

    @property
    def animation_progress(self) -> float:
        return self._progress

    @property
    def front_entry(self) -> Optional[Move]:
        return self._pending[0] if self._pending else None

    @property
    def progress_fraction(self) -> float:
        front = self.front_entry
        if front is None:
            return 0.0
        return min(self._progress / front.anim_length, 1.0)

    @property
    def pending(self) -> tuple:
        return tuple(self._pending)

    def plan(self, request: Move) -> list[Move]:
        """Primitive moves for ``request``, or an empty list if it cannot be played now."""
        if isinstance(request, Gyro):
            puzzle = self.puzzle
            moves = build_gyro_sequence(
                puzzle.outer_slice_pos, puzzle.middle_slice_pos, puzzle.middle_slice_dir, request.cell
            )
        else:
            moves = [request]

        scratch = Puzzle(self.puzzle.state)
        for move in moves:
            if not scratch.can_apply(move):
                return []
            scratch.apply_move(move)
        return moves

    def request(self, move: Move) -> bool:
        if self._animating:
            return False
        moves = self.plan(move)
        if not moves:
            logger.debug("Ignoring illegal request %s", move)
            return False
        self.push(moves)
        return True

    def push(self, moves: Iterable[Move]):
        moves = list(moves)
        if not moves:
            return
        self._pending.extend(moves)
        self._animating = True
        logger.debug("Queued %s", " ".join(str(m) for m in moves))

    def tick(self, dt: float, keys: Iterable[str] = ()) -> Optional[Move]:
        """Advance one frame; returns the move committed on this tick, if any."""
        if self._animating:
            self._progress += dt * self.animation_speed
            front = self._pending[0]
            if self._progress <= front.anim_length:
                return None
            self._pending.popleft()
            self.puzzle.apply_move(front)
            self.history.record(front)
            self._progress = 0.0
            if not self._pending:
                self._animating = False
            return front

        request = self.decoder.decode(keys, self.puzzle)
        if request is not None:
            self.request(request)
        return None

    def clear(self):
        self._pending.clear()
        self._animating = False
        self._progress = 0.0
        self.decoder.reset()
