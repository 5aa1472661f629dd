"""Console logging setup shared by the dashboard and the CLI."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "tiktok_analytics.console"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a single console handler to the package logger.

    Safe to call repeatedly (Streamlit re-runs the script on every
    interaction); the handler is installed once and only the level changes.
    """
    logger = logging.getLogger("tiktok_analytics")
    logger.setLevel(level)

    for handler in logger.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setLevel(level)
            return logger

    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(console_handler)
    logger.propagate = False
    return logger
