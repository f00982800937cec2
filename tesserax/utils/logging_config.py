"""
Package log output.

Every module logs through ``logging.getLogger(__name__)``, so records all land
under the ``tesserax`` logger; ``setup_logging`` decides where they go. Scripts
call it once at start-up and may call it again to change level or target.
"""
import logging
import sys
from typing import Optional

from tesserax import config


def _attach(logger: logging.Logger, handler: logging.Handler, level: int):
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route package logs to stdout, and to ``log_file`` (overwritten) if given.

    Handlers from an earlier call are closed and replaced.
    """
    logger = logging.getLogger(config.LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    _attach(logger, logging.StreamHandler(sys.stdout), level)
    if log_file:
        _attach(logger, logging.FileHandler(log_file, mode="w", encoding="utf-8"), level)

    logger.info("Logging initialized.")
    return logger
