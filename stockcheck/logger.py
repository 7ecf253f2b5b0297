"""
Unified logging module
======================

Single place where the ``stockcheck`` package configures its loggers.

Usage:
    from stockcheck.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Header row found at %s", idx)
    logger.debug("Rejected row %s: %s", idx, reason)
"""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LEVEL = logging.INFO

ROOT_LOGGER_NAME = "stockcheck"

_root_configured = False


def _resolve_level(level: object) -> int:
    if isinstance(level, int):
        return level
    name = str(level or "").strip().upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else DEFAULT_LEVEL


def _configure_root_logger() -> None:
    """
    Attach a stdout handler to the package root logger.

    Runs once; the ``_root_configured`` flag prevents duplicate handlers.
    """
    global _root_configured
    if _root_configured:
        return

    from stockcheck.config import get_settings

    level = _resolve_level(get_settings().LOG_LEVEL)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DEFAULT_DATE_FORMAT))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)
    root_logger.propagate = False

    _root_configured = True


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Return a logger for *name*, configuring the package root on first use.

    Args:
        name: logger name, usually the calling module's ``__name__``
        level: optional explicit level for this logger only
    """
    _configure_root_logger()

    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_level(level: int, logger_name: Optional[str] = None) -> None:
    """
    Change the level of one logger, or of the package root when no name is given.

    Example:
        set_level(logging.DEBUG)                                  # whole package
        set_level(logging.DEBUG, "stockcheck.extraction.header_locator")
    """
    logger = logging.getLogger(logger_name or ROOT_LOGGER_NAME)
    logger.setLevel(level)
