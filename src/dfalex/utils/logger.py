"""Minimal logging utilities for dfalex.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications (or the CLI) configure them.

Example:
    >>> from dfalex.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Scanning %s", "input.txt")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "dfalex." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'dfalex.mymodule'
    """
    # Ensure dfalex prefix for consistent namespacing
    if not (name == "dfalex" or name.startswith("dfalex.")):
        name = f"dfalex.{name}"
    return logging.getLogger(name)
