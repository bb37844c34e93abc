"""Logging setup for the reknit command line."""

from __future__ import annotations

import logging
import sys

DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, fmt: str = DEFAULT_FORMAT) -> None:
    """Attach a single stderr handler to the ``reknit`` logger.

    Parameters
    ----------
    level : int, optional
        Threshold applied to the ``reknit`` logger (default ``logging.INFO``).
    fmt : str, optional
        Format string for the stderr handler.
    """
    logger = logging.getLogger("reknit")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    logger.setLevel(level)


__all__ = ["configure_logging"]
