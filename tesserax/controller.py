import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

import chex
import jax

from tesserax import config
from tesserax.core.history import MoveHistory
from tesserax.core.moves import Move, MoveType, inverse
from tesserax.core.pieces import PuzzleState
from tesserax.core.puzzle import Puzzle
from tesserax.scheduler.sequencer import MoveScheduler
from tesserax.utils.loader import ArrangementError, load_state

logger = logging.getLogger(__name__)

SCRAMBLE_FAMILIES = (MoveType.TURN, MoveType.GYRO)


class PuzzleController:
    """
    Session façade. Owns the puzzle, its history and the scheduler; the
    scheduler only borrows the puzzle and history. Reset, scramble, open,
    undo and redo act synchronously and report failure as ``False``.
    """

    def __init__(
        self,
        seed: int = config.DEFAULT_SEED,
        loader: Callable[[Union[str, Path]], PuzzleState] = load_state,
        animation_speed: float = config.ANIMATION_SPEED,
    ):
        self.puzzle = Puzzle()
        self.history = MoveHistory()
        self.scheduler = MoveScheduler(self.puzzle, self.history, animation_speed=animation_speed)
        self._key = jax.random.PRNGKey(seed)
        self._loader = loader
        # status label plus the history entry it depends on, if any
        self._origin: Optional[tuple] = None

    def tick(self, dt: float, keys: Iterable[str] = ()) -> Optional[Move]:
        return self.scheduler.tick(dt, keys)

    def reset_puzzle(self):
        self.scheduler.clear()
        self.puzzle.reset()
        self.history.clear()
        self._origin = None
        logger.info("Puzzle reset")

    def scramble_puzzle(self, n: int = 0, key: Optional[chex.PRNGKey] = None) -> bool:
        """
        Apply ``n`` random legal turns and gyros (``n == 0`` for a full
        scramble) straight to the puzzle, logged as one history entry.
        """
        if n < 0:
            raise ValueError(f"Scramble length must be non-negative, got {n}")
        if self.scheduler.animating:
            return False
        length = n if n > 0 else config.FULL_SCRAMBLE_LENGTH
        if key is None:
            self._key, key = jax.random.split(self._key)
        draws = jax.random.uniform(key, (length,))

        moves = []
        for draw in draws.tolist():
            legal = self.puzzle.legal_moves(SCRAMBLE_FAMILIES)
            move = legal[min(int(draw * len(legal)), len(legal) - 1)]
            self.puzzle.apply_move(move)
            moves.append(move)
        self.history.record(*moves)
        index = self.history.get_turn_count() - 1
        self._origin = (f"Scrambled ({length} moves)", index, self.history.entries[index])
        logger.info("Scrambled with %d moves", length)
        return True

    def undo_move(self) -> bool:
        if self.scheduler.animating or not self.history.can_undo():
            return False
        for move in reversed(self.history.undo()):
            self.puzzle.apply_move(inverse(move))
        return True

    def redo_move(self) -> bool:
        if self.scheduler.animating or not self.history.can_redo():
            return False
        for move in self.history.redo():
            self.puzzle.apply_move(move)
        return True

    def open_file(self, path: Union[str, Path]) -> bool:
        try:
            state = self._loader(path)
        except (OSError, ArrangementError) as exc:
            logger.warning("Could not open %s: %s", path, exc)
            return False
        self.scheduler.clear()
        self.puzzle.load_state(state)
        self.history.clear()
        self._origin = (f"Opened {Path(path).name}", None, None)
        return True

    def get_status(self) -> str:
        if self.puzzle.is_solved():
            return "Solved"
        if self._origin is None:
            return "Unsolved"
        label, index, entry = self._origin
        if index is not None and (
            self.history.get_turn_count() <= index or self.history.entries[index] is not entry
        ):
            return "Unsolved"
        return label

    def get_turn_count(self) -> int:
        return self.history.get_turn_count()
