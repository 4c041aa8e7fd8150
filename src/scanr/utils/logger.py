"""Minimal logging utilities for scanr.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from scanr.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("producer started")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "scanr." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'scanr.mymodule'
    """
    if not (name == "scanr" or name.startswith("scanr.")):
        name = f"scanr.{name}"
    return logging.getLogger(name)
