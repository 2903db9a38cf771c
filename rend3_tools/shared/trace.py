"""Command tracing, the moral equivalent of ``set -x``."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "rend3_tools"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or one of its children."""
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def configure_logging(*, trace: bool = True) -> logging.Logger:
    """Install a bare stderr handler on the package logger.

    With ``trace`` enabled every external command is echoed before it runs.
    Calling this twice does not stack handlers.
    """
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO if trace else logging.WARNING)
    logger.propagate = False
    return logger
