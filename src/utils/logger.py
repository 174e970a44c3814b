"""Logging helpers shared by every component."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger with a single stream handler attached.

    Calling it again for the same name reuses the existing handler and only
    updates the level.

    Args:
        name: Logger name, usually ``__name__``
        level: Logging level; defaults to ``LOG_LEVEL`` from settings

    Returns:
        Configured logger
    """
    if level is None:
        from config import settings

        level = logging.getLevelName(settings.log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
