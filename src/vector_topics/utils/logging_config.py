"""
Logging helpers.

All package loggers live under the ``vector_topics`` namespace so a single
call to :func:`setup_logging` controls their output.
"""

import logging
import sys
from typing import Optional, Union

from ..config import config

ROOT_LOGGER_NAME = "vector_topics"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package namespace."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: Union[int, str, None] = None, fmt: str = DEFAULT_FORMAT
) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Calling this more than once only updates the level and format; it never
    stacks handlers.

    Args:
        level: Logging level name or number. Defaults to ``config.log_level``.
        fmt: Format string for the handler.

    Returns:
        The package root logger.
    """
    global _handler

    if level is None:
        level = config.log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        root.addHandler(_handler)
    _handler.setFormatter(logging.Formatter(fmt))
    _handler.setLevel(level)
    return root
