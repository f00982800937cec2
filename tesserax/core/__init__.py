"""
Core puzzle components.

Piece model, move families, the combinatorial engine and the undo/redo history.
"""

from tesserax.core.history import MoveHistory
from tesserax.core.moves import (
    Gyro,
    GyroMiddle,
    GyroOuter,
    Move,
    MoveType,
    Rotate,
    RotateDirection,
    Turn,
    inverse,
)
from tesserax.core.pieces import EMPTY, CellLocation, MiddleSliceDir, PuzzleState, solved_state
from tesserax.core.puzzle import Puzzle

__all__ = [
    "CellLocation",
    "EMPTY",
    "Gyro",
    "GyroMiddle",
    "GyroOuter",
    "MiddleSliceDir",
    "Move",
    "MoveHistory",
    "MoveType",
    "Puzzle",
    "PuzzleState",
    "Rotate",
    "RotateDirection",
    "Turn",
    "inverse",
    "solved_state",
]
