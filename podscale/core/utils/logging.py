"""Logging utilities for PodScale runtime components."""

from __future__ import annotations

import logging
import sys
from typing import Optional


_HANDLER_NAME = "_podscale_stream_handler"
_LOGGER_NAME = "podscale"


def configure_runtime_logging(
    level: int = logging.INFO,
    formatter: Optional[logging.Formatter] = None,
    *,
    logger_name: str = _LOGGER_NAME,
) -> logging.Logger:
    """
    Attach a single stdout handler to the ``podscale`` logger.

    Safe to call repeatedly (every actor constructor does): the tagged handler
    is reused and only its level/format are refreshed. Importing the library
    never calls this.
    """
    logger = logging.getLogger(logger_name)
    if formatter is None:
        formatter = logging.Formatter("[%(levelname)s] %(name)s: %(message)s")

    existing = None
    for handler in logger.handlers:
        if getattr(handler, _HANDLER_NAME, False):
            existing = handler
            break

    if existing is None:
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        setattr(stream_handler, _HANDLER_NAME, True)
        logger.addHandler(stream_handler)
    else:
        existing.setFormatter(formatter)
        existing.setLevel(level)

    logger.setLevel(level)
    return logger
