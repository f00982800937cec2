"""
Tesserax: a 4D twisting-puzzle state machine with JAX

Models the physical "3to4" 3x3x3x3 puzzle: two 3x3x3 cells, an inner and an
outer slice and a movable middle slice. Provides the combinatorial engine,
an undo/redo history, a frame-driven move scheduler and a session controller.
"""

from tesserax.controller import PuzzleController
from tesserax.core import (
    CellLocation,
    Gyro,
    GyroMiddle,
    GyroOuter,
    MiddleSliceDir,
    Move,
    MoveHistory,
    MoveType,
    Puzzle,
    PuzzleState,
    Rotate,
    RotateDirection,
    Turn,
    inverse,
    solved_state,
)
from tesserax.scheduler import IntentDecoder, KeyBindings, MoveScheduler, build_gyro_sequence
from tesserax.utils.loader import ArrangementError, load_state

__version__ = "0.1.0"

__all__ = [
    # Core
    "Puzzle",
    "PuzzleState",
    "CellLocation",
    "MiddleSliceDir",
    "solved_state",
    # Moves
    "Move",
    "MoveType",
    "RotateDirection",
    "Turn",
    "Rotate",
    "Gyro",
    "GyroOuter",
    "GyroMiddle",
    "inverse",
    # Sequencing
    "MoveHistory",
    "MoveScheduler",
    "IntentDecoder",
    "KeyBindings",
    "build_gyro_sequence",
    # Session
    "PuzzleController",
    "ArrangementError",
    "load_state",
]
