"""Logging configuration for lazyreel.

The player owns the whole terminal, so records never go to stdout/stderr.
They are written to ``--log-file`` when one is given and dropped otherwise.
"""

from __future__ import annotations

import logging
from pathlib import Path

ROOT_LOGGER_NAME = "lazyreel"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


def setup_logging(level: str = "INFO", log_file: Path | None = None) -> logging.Logger:
    """Configure the ``lazyreel`` logger tree and return its root logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional log file path. Without one a ``NullHandler`` is
            installed so library records are discarded.
    """
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"unknown log level: {level!r}")

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return logger

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)
    return logger


__all__ = ["ROOT_LOGGER_NAME", "setup_logging"]
