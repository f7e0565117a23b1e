"""
Package logger for daystrip.

Records up to INFO go to stdout and WARNING and above go to stderr, so a
host can split render chatter from problems. The threshold comes from
LOG_LEVEL (see daystrip.config).
"""

import logging
import sys
from typing import Optional
from daystrip.config import LOG_LEVEL, LOGGER_NAME

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LevelFilter(logging.Filter):
    """Pass only records whose level lies in [level_min, level_max]."""

    def __init__(self, level_min: int, level_max: int):
        super().__init__()
        self.level_min = level_min
        self.level_max = level_max

    def filter(self, record: logging.LogRecord) -> bool:
        return self.level_min <= record.levelno <= self.level_max


def _stream_handler(stream, level: int, formatter: logging.Formatter, level_max: Optional[int] = None) -> logging.Handler:
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    if level_max is not None:
        handler.addFilter(LevelFilter(level, level_max))
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """
    (Re)build the daystrip logger.

    Safe to call repeatedly: earlier handlers are dropped first. The logger
    does not propagate, so records are not duplicated by a host's root
    configuration.

    Args:
        level: Threshold name such as "DEBUG" or "WARNING"

    Returns:
        The configured daystrip logger
    """
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(level)
    log.propagate = False
    log.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    log.addHandler(_stream_handler(sys.stdout, logging.DEBUG, formatter, level_max=logging.INFO))
    log.addHandler(_stream_handler(sys.stderr, logging.WARNING, formatter))
    return log


logger = setup_logging()
