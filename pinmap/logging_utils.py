# pinmap/logging_utils.py
"""Logging helpers.

All package loggers hang off the ``pinmap`` logger. ``configure_logging`` is
idempotent: calling it again only changes the level.
"""
from __future__ import annotations

import logging

ROOT_LOGGER = "pinmap"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger, e.g. ``pinmap.cluster_utils``."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    if not any(getattr(h, "_pinmap_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._pinmap_handler = True
        logger.addHandler(handler)
    return logger
