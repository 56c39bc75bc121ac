# thumb_scout/logger.py
"""Logging for ThumbScout.

Every module logs through the one project logger::

    from thumb_scout.logger import logger
    logger.debug("pipeline started")

Console output goes to stderr: ``thumb_scout lookup`` prints its JSON result
on stdout. The CLI calls :func:`configure` to pick the level, format and an
optional log file.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Final, Optional, Union

LOGGER_NAME: Final[str] = "ThumbScout"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

logger: logging.Logger = logging.getLogger(LOGGER_NAME)


def configure(
    level: Union[int, str] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the project logger's handlers: stderr, plus *log_file* if given."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(logging.FileHandler(str(log_file), encoding="utf-8"))
    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False
    return logger


configure()

__all__ = ["LOGGER_NAME", "DEFAULT_FORMAT", "logger", "configure"]
