"""Structured logging for linkalk.

Every pipeline stage logs through a ``linkalk.<stage>`` child logger, so
turning the root ``linkalk`` logger to DEBUG traces tokens, postfix
sequences and final polynomials of each evaluation.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime

from .config import LOG_LEVEL

ROOT_LOGGER_NAME = "linkalk"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class StructuredFormatter(logging.Formatter):
    """Render ``<iso timestamp> [LEVEL] logger: message`` lines."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        line = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: str = LOG_LEVEL, log_file: str | None = None) -> logging.Logger:
    """Configure the ``linkalk`` logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path receiving a copy of the log stream

    Returns:
        The configured root logger of the application
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    # Reconfiguring replaces previous handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = StructuredFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``linkalk.<name>`` child logger of a module."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
