"""
Logging for the seasonal glass engine.

DEBUG/INFO go to stdout, WARNING and above to stderr. The level comes
from LOG_LEVEL. The engine logger does not propagate to the root logger.
"""

import logging
import sys
from typing import Optional, TextIO

from seasonal_glass.config import LOG_LEVEL

LOGGER_NAME = "seasonal_glass"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LevelFilter(logging.Filter):
    """Pass records whose level is within [level_min, level_max]."""

    def __init__(self, level_min: int, level_max: int):
        super().__init__()
        self.level_min = level_min
        self.level_max = level_max

    def filter(self, record: logging.LogRecord) -> bool:
        return self.level_min <= record.levelno <= self.level_max


def _stream_handler(stream: TextIO, level_min: int, level_max: int) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level_min)
    handler.addFilter(LevelFilter(level_min, level_max))
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    name: str = LOGGER_NAME,
    level: str = LOG_LEVEL,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure a logger with split stdout/stderr handlers.

    Calling it again replaces the handlers (module reloads in tests).

    Args:
        name: Logger name
        level: Level name, e.g. "INFO"
        stdout: Stream for DEBUG/INFO (default sys.stdout)
        stderr: Stream for WARNING+ (default sys.stderr)
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    logger.handlers.clear()

    logger.addHandler(_stream_handler(stdout or sys.stdout, logging.DEBUG, logging.INFO))
    logger.addHandler(_stream_handler(stderr or sys.stderr, logging.WARNING, logging.CRITICAL))
    return logger


logger = setup_logging()
