"""Logging setup for the sarfiles command line."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "sarfiles"


def configure_logging(level: str | int, *, console: Console | None = None) -> logging.Logger:
    """Attach a single Rich handler to the package logger and set its level.

    Calling this again only updates the level.
    """
    if isinstance(level, str):
        level = level.upper()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_time=False,
            show_path=False,
            rich_tracebacks=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger


__all__ = ["PACKAGE_LOGGER", "configure_logging"]
