"""Logging configuration."""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_level: str = "INFO") -> logging.Logger:
    """Configure the ``scholar_collector`` package logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.

    Returns:
        The configured package logger.  Calling this more than once replaces
        the handler instead of stacking duplicates.
    """
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logger = logging.getLogger("scholar_collector")
    logger.setLevel(numeric_level)

    for handler in list(logger.handlers):
        if getattr(handler, "_scholar_collector", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler._scholar_collector = True  # type: ignore[attr-defined]
    logger.addHandler(handler)

    return logger
