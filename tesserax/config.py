"""
Configuration
=============
Central registry of the constants shared by the puzzle engine, the move
scheduler and the controller.

Exports:
    ANIMATION_SPEED (float): Progress units gained per second of frame time.
    TURN_ANIM_LENGTH, ROTATE_ANIM_LENGTH, ... (float): Progress needed before a
        queued move of that family commits.
    FULL_SCRAMBLE_LENGTH (int): Move count used by ``scramble_puzzle(0)``.
    CELL_KEYS, DIRECTION_KEYS, ... (dict / str): Default input bindings.
    LOGGER_NAME, LOG_FORMAT, LOG_DATE_FORMAT (str): Package log record layout.
"""

# Scheduler timing
ANIMATION_SPEED: float = 4.0

TURN_ANIM_LENGTH: float = 1.0
ROTATE_ANIM_LENGTH: float = 1.0
SIDE_GYRO_ANIM_LENGTH: float = 4.0  # LEFT / RIGHT gyro
POLAR_GYRO_ANIM_LENGTH: float = 3.0  # UP / DOWN / FRONT / BACK gyro
GYRO_OUTER_ANIM_LENGTH: float = 2.0
GYRO_MIDDLE_ANIM_LENGTH: float = 1.0

# Controller
FULL_SCRAMBLE_LENGTH: int = 100
DEFAULT_SEED: int = 0

# Input bindings, values are CellLocation / RotateDirection member names
CELL_KEYS: dict[str, str] = {
    "W": "LEFT",
    "E": "UP",
    "R": "BACK",
    "S": "FRONT",
    "D": "IN",
    "F": "RIGHT",
    "C": "DOWN",
    "V": "OUT",
}
DIRECTION_KEYS: dict[str, str] = {
    "I": "YZ",
    "K": "ZY",
    "J": "ZX",
    "L": "XZ",
    "O": "XY",
    "U": "YX",
}
GYRO_KEY: str = "SPACE"
MIDDLE_SLICE_KEYS: dict[str, int] = {
    "M": -1,
    "PERIOD": 1,
    "COMMA": 0,
}

# Logging
LOGGER_NAME: str = "tesserax"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT: str = "%H:%M:%S"
