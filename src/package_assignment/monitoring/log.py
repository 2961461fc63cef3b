"""Logging setup for command line runs.

Library modules only create loggers with ``logging.getLogger(__name__)``;
handlers are installed here, once, by the entry point.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "package_assignment"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO", log_file: Path | str | None = None) -> logging.Logger:
    """Attach console (and optional file) handlers to the package logger.

    Calling it again replaces the handlers instead of stacking duplicates.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
