"""
Logger setup shared by core modules, scripts and the Streamlit app.
"""

from __future__ import annotations

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from core.config import get_log_format, get_log_level


ROOT_LOGGER_NAME = "wordcards"


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger under the wordcards hierarchy.

    Handlers are attached once to the root "wordcards" logger; child
    loggers (e.g. "wordcards.sync") propagate to it.

    Args:
        name: Dotted logger name, prefixed with "wordcards." if needed

    Returns:
        Configured logging.Logger
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        root.setLevel(get_log_level())
        handler = logging.StreamHandler(sys.stdout)
        if get_log_format() == "json":
            fmt = JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        else:
            fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        handler.setFormatter(fmt)
        root.addHandler(handler)

    return logging.getLogger(name)
