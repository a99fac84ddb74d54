"""
Logging configuration for command-line tools and services.

The pricing engine itself never logs; the `prediction_pump.integration`
modules log under the `prediction_pump` logger hierarchy, configured here.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional


LOGGER_NAME = "prediction_pump"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: int = logging.INFO,
    *,
    log_file: Optional[Path] = None,
    console_output: bool = True,
) -> logging.Logger:
    """
    Configure the package logger. Safe to call more than once.

    Args:
        level: Logging level
        log_file: Optional file to append log records to
        console_output: Whether to log to stderr

    Returns:
        The configured package logger
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if console_output:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.debug("logging initialized (level=%s)", logging.getLevelName(level))
    return logger
