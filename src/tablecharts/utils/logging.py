"""Package logger helpers.

Modules log through ``get_logger(__name__)``. Only entry points (the NiceGUI
app, example scripts) call ``configure_logging()`` to send the ``tablecharts``
logger to stderr. Nothing is written to disk.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

LOG_LEVEL_ENV = "TABLECHARTS_LOG_LEVEL"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """Attach a stderr handler to the ``tablecharts`` logger.

    Args:
        level: Level name or number; falls back to $TABLECHARTS_LOG_LEVEL, then INFO.
        fmt: Record format, DEFAULT_FMT if omitted.
        datefmt: Timestamp format, DEFAULT_DATEFMT if omitted.
        force: Drop existing handlers first. Without it a second call only
            updates the level.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("tablecharts")
    logger.setLevel(level)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    elif any(
        isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
        for h in logger.handlers
    ):
        return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT))
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for ``name``, or the package logger when name is None."""
    return logging.getLogger(name or "tablecharts")
