"""Logging setup for graphmap. Library code only logs; applications opt in here."""

from __future__ import annotations

import logging
import sys

from graphmap.config import MappingSettings

__all__ = ["configure_logging", "get_logger"]

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def configure_logging(
    level: str | int | None = None,
    stream=None,
    settings: MappingSettings | None = None,
) -> logging.Logger:
    """
    Attach a single stream handler to the `graphmap` logger.

    The level defaults to `settings.log_level` (MappingSettings.load() when no
    settings are given). Calling it again replaces the handler instead of adding
    another one. The root logger is left untouched.
    """
    if level is None:
        settings = settings if settings is not None else MappingSettings.load()
        level = settings.log_level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))

    logger = logging.getLogger("graphmap")
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)
