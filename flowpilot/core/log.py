"""Logging setup for flowpilot."""

import logging
import sys

LOG_FORMAT = "[%(asctime)s] [%(name)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """
    Install a single stream handler on the package logger.

    Calling it again only updates the level.

    Args:
        level: Logging level name or number

    Returns:
        The `flowpilot` logger
    """
    logger = logging.getLogger("flowpilot")
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not any(getattr(h, "_flowpilot", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handler._flowpilot = True
        logger.addHandler(handler)

    return logger
