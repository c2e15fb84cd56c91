"""Minimal logging utilities for lexmatic.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from lexmatic.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Building automaton")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "lexmatic." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'lexmatic.mymodule'
    """
    if not (name == "lexmatic" or name.startswith("lexmatic.")):
        name = f"lexmatic.{name}"
    return logging.getLogger(name)
