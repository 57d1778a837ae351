"""Logging configuration for the Thought Threads package."""

from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "thought_threads"

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_RICH_FORMAT = "%(name)s | %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO, handler: Optional[logging.Handler] = None) -> None:
    """Attach a single handler to the package logger.

    Without ``handler`` records go to stderr through rich. A handler passed in
    without a formatter gets the plain pipe-separated format. Calling this
    again replaces the previous handler rather than stacking another one.
    """
    if isinstance(level, str):
        level = level.upper()
    if handler is None:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter(_RICH_FORMAT))
    elif handler.formatter is None:
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    logger.handlers[:] = [handler]


def get_logger(name: str) -> logging.Logger:
    """Return a logger configured for the given ``name``."""
    return logging.getLogger(name)
