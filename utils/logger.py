"""
utils/logger.py
---------------
Logging setup for the cart store.
Modules call `get_logger(__name__)`; the first call attaches the project
handler to the root logger. `configure_logging` can be called again to
change the level or output stream without stacking handlers.
"""

import logging
import sys
from typing import Optional, TextIO

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "burger_cart"


def _project_handlers(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if h.get_name() == HANDLER_NAME]


def configure_logging(level: Optional[str] = None, stream: Optional[TextIO] = None) -> logging.Handler:
    """
    Install (or replace) the project handler on the root logger.

    Args:
        level: Level name such as "DEBUG"; defaults to LOG_LEVEL from config.
        stream: Output stream; defaults to stdout.

    Returns:
        The handler now attached to the root logger.
    """
    root = logging.getLogger()
    for old in _project_handlers(root):
        root.removeHandler(old)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root.addHandler(handler)
    root.setLevel((level or LOG_LEVEL).upper())
    return handler


def get_logger(name: str) -> logging.Logger:
    """Named logger; configures logging on first use."""
    if not _project_handlers(logging.getLogger()):
        configure_logging()
    return logging.getLogger(name)
