"""Logger setup for applications embedding pathwire.

The library itself only ever calls ``logging.getLogger(__name__)``; nothing
is printed until an application configures the ``pathwire`` logger, for
example with :func:`init_logger`.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "pathwire"
LOG_FORMAT = "%(asctime)s %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"


def init_logger(level: int | str = logging.ERROR, stream: TextIO | None = None) -> logging.Logger:
    """Configure and return the package logger.

    Records carry date and time but no level name. Calling this again
    replaces the previously installed stream handler instead of stacking
    a second one.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_pathwire", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._pathwire = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
