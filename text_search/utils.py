"""
Utility functions for logging and log-line formatting.
"""

import logging
import sys
from typing import List, Optional, Union

from .config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Optional[Union[str, int]] = None, stream=None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Calling it again replaces the handler it installed earlier instead of
    adding a second one.

    Args:
        level: Logging level name or number. Defaults to LOG_LEVEL.
        stream: Output stream. Defaults to stderr.

    Returns:
        The package logger.
    """
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger("text_search")
    for handler in list(logger.handlers):
        if getattr(handler, "_text_search_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._text_search_handler = True
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def format_terms(terms: List[str], maxn: int = 12) -> str:
    """
    Return terms as a compact string; truncate long lists with an ellipsis.

    Args:
        terms: List of terms to format.
        maxn: Maximum number of terms to show.

    Returns:
        Formatted term string.
    """
    if len(terms) <= maxn:
        return "[" + ", ".join(terms) + "]"
    head = ", ".join(terms[:maxn // 2])
    tail = ", ".join(terms[-(maxn // 2):])
    return "[" + head + ", …, " + tail + "]"
