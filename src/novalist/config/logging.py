"""Logging setup for the command line."""

from __future__ import annotations

import logging
import os

from .errors import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_LEVEL_ENV = "NOVALIST_LOG_LEVEL"

# these log every request at INFO
_CHATTY_LOGGERS = ("httpx", "hishel", "spotipy")


def level_from_env(default: int = logging.INFO) -> int:
    value = os.getenv(LOG_LEVEL_ENV)
    if value is None or not value.strip():
        return default
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Invalid log level for {LOG_LEVEL_ENV}: {value!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once.

    Without an explicit ``level`` the ``NOVALIST_LOG_LEVEL`` variable is used,
    falling back to INFO. Pass ``force=True`` to reconfigure during tests.
    """

    effective = level if level is not None else level_from_env()
    logging.basicConfig(level=effective, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(effective, logging.WARNING))
