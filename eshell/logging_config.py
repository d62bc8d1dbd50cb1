"""Logging setup for eshell.

Levels come from ``--log-level`` or the ``ESHELL_LOG_LEVEL`` environment
variable and accept either a level name or a number. Records go to stderr,
coloured by severity.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Final

from yachalk import chalk

LOG_LEVEL_ENV: Final[str] = "ESHELL_LOG_LEVEL"
LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"


class ChalkFormatter(logging.Formatter):
    """Formatter that colours whole records by severity."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        level = record.levelno
        if level >= logging.CRITICAL:
            return chalk.red_bright(message)
        if level >= logging.ERROR:
            return chalk.red(message)
        if level >= logging.WARNING:
            return chalk.yellow(message)
        if level >= logging.INFO:
            return chalk.green(message)
        return chalk.gray(message)


def parse_log_level(value: str | int | None) -> int | None:
    """Translate a level name or number into a logging level."""

    if value is None or value == "":
        return None
    if isinstance(value, int):
        return value
    text = value.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if isinstance(level, int):
        return level
    raise ValueError(f"Unknown log level: {value!r}")


def resolve_env_log_level() -> int | None:
    try:
        return parse_log_level(os.environ.get(LOG_LEVEL_ENV))
    except ValueError:
        return None


def setup_logging(level: int | None = None) -> logging.Logger:
    """Attach one stderr handler to the ``eshell`` logger."""

    if level is None:
        level = resolve_env_log_level() or logging.WARNING
    logger = logging.getLogger("eshell")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ChalkFormatter(DEBUG_LOG_FORMAT if level <= logging.DEBUG else LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


__all__ = ["LOG_LEVEL_ENV", "ChalkFormatter", "parse_log_level", "resolve_env_log_level", "setup_logging"]
