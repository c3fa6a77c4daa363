"""Logging setup shared by the search, the torus and the CLI."""

from __future__ import annotations

import logging
from typing import Optional, TextIO


ROOT_LOGGER_NAME = "hextorus"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Handler:
    """Route every record to ``stream`` (stderr by default) and return the handler.

    Progress and best-so-far records carry multi-line torus renderings, so
    the timestamp and logger name stay on the first line only.
    """

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``hextorus`` namespace.

    Names outside the namespace (e.g. ``__main__``) are nested under it so a
    single level applies to the whole tool.
    """

    if not logging.getLogger().handlers:
        configure_logging()
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
