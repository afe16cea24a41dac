"""Logging helpers.

Example:
    >>> from strscan.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Loaded configuration")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return a standard library logger namespaced under ``strscan``.

    Args:
        name: Logger name, typically ``__name__``.

    Returns:
        logging.Logger: Logger whose name starts with ``strscan.``.

    Examples:
        get_logger("tools").name  # "strscan.tools"
    """
    if not (name == "strscan" or name.startswith("strscan.")):
        name = f"strscan.{name}"
    return logging.getLogger(name)
