from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Union

from tesserax import config
from tesserax.core.pieces import CellLocation


class MoveType(IntEnum):
    TURN = 0
    ROTATE = 1
    GYRO = 2
    GYRO_OUTER = 3
    GYRO_MIDDLE = 4


class RotateDirection(Enum):
    """Quarter-turn plane as (from, to) over the physical axes x=0, y=1, z=2."""

    YZ = (1, 2)
    ZY = (2, 1)
    ZX = (2, 0)
    XZ = (0, 2)
    XY = (0, 1)
    YX = (1, 0)

    @property
    def inverse(self) -> "RotateDirection":
        first, second = self.value
        return RotateDirection((second, first))

    @property
    def axis(self) -> int:
        """Physical axis the turn spins about."""
        return 3 - sum(self.value)

    @property
    def notation(self) -> str:
        name = "xyz"[self.axis]
        return name if self in _POSITIVE_DIRECTIONS else f"{name}'"


_POSITIVE_DIRECTIONS = {RotateDirection.YZ, RotateDirection.ZX, RotateDirection.XY}


@dataclass(frozen=True)
class Turn:
    cell: CellLocation
    direction: RotateDirection

    type = MoveType.TURN

    @property
    def anim_length(self) -> float:
        return config.TURN_ANIM_LENGTH

    def __str__(self):
        return f"{self.cell.symbol}{self.direction.notation}"


@dataclass(frozen=True)
class Rotate:
    direction: RotateDirection

    type = MoveType.ROTATE

    @property
    def anim_length(self) -> float:
        return config.ROTATE_ANIM_LENGTH

    def __str__(self):
        return self.direction.notation


@dataclass(frozen=True)
class Gyro:
    cell: CellLocation

    type = MoveType.GYRO

    @property
    def anim_length(self) -> float:
        if self.cell in (CellLocation.LEFT, CellLocation.RIGHT):
            return config.SIDE_GYRO_ANIM_LENGTH
        return config.POLAR_GYRO_ANIM_LENGTH

    def __str__(self):
        return f"{self.cell.symbol}*"


@dataclass(frozen=True)
class GyroOuter:
    type = MoveType.GYRO_OUTER

    @property
    def anim_length(self) -> float:
        return config.GYRO_OUTER_ANIM_LENGTH

    def __str__(self):
        return "O*"


@dataclass(frozen=True)
class GyroMiddle:
    location: int

    type = MoveType.GYRO_MIDDLE

    @property
    def anim_length(self) -> float:
        return config.GYRO_MIDDLE_ANIM_LENGTH

    def __str__(self):
        if self.location == 0:
            return "M~"
        return "M+" if self.location > 0 else "M-"


Move = Union[Turn, Rotate, Gyro, GyroOuter, GyroMiddle]


def inverse(move: Move) -> Move:
    """The move of the same family that undoes ``move``."""
    if isinstance(move, Turn):
        return Turn(move.cell, move.direction.inverse)
    if isinstance(move, Rotate):
        return Rotate(move.direction.inverse)
    if isinstance(move, Gyro):
        return Gyro(move.cell.opposite)
    if isinstance(move, GyroOuter):
        return move
    if isinstance(move, GyroMiddle):
        return GyroMiddle(-move.location)
    raise TypeError(f"Unknown move type: {type(move).__name__}")
