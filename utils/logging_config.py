"""Logging setup for the Xenith app.

The `market` core stays silent (NullHandler) until the app opts in. Streamlit reruns
the entry script on every interaction, so `configure_from_env()` is idempotent: it
installs one console handler per application logger and only adjusts levels after that.

Public API:
- enable_console_logging(level) -> logging.Handler
- configure_from_env() -> None
- set_level(level) -> None
- disable_logging() -> None
"""

from __future__ import annotations

import logging
from typing import Literal

from config import get_log_level

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Application loggers configured here; children (market.simulator, ...) propagate to them
LOGGER_NAMES: tuple[str, ...] = ("market", "utils", "config")

_HANDLER_NAME = "xenith-console"


def _get_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, str(level).upper(), logging.INFO)


def _find_handler(logger: logging.Logger) -> logging.Handler | None:
    return next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)


def enable_console_logging(
    level: LogLevel | int = "INFO",
    format: str = DEFAULT_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> logging.Handler:
    """Attach a single stderr handler to every application logger and set their level."""
    numeric = _get_level(level)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(format, date_format))
    handler.setLevel(numeric)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        existing = _find_handler(logger)
        if existing is not None:
            existing.setLevel(numeric)
        else:
            logger.addHandler(handler)
        logger.setLevel(numeric)
    return handler


def configure_from_env() -> None:
    """Configure console logging from XN_LOG_LEVEL (secrets, env or .env)."""
    enable_console_logging(get_log_level())


def set_level(level: LogLevel | int) -> None:
    numeric = _get_level(level)
    for name in LOGGER_NAMES:
        logging.getLogger(name).setLevel(numeric)


def disable_logging() -> None:
    """Remove the console handlers added by this module."""
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        handler = _find_handler(logger)
        if handler is not None:
            logger.removeHandler(handler)
            handler.close()
