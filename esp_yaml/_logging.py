"""Logging helpers shared by the esp_yaml builders, loader, and CLI.

Modules obtain loggers through :func:`get_logger` so every record lives under
the ``esp_yaml`` hierarchy. :func:`setup_logging` installs a single stream
handler on the root logger; when no explicit level is given the
``ESP_YAML_LOG_LEVEL`` environment variable is consulted (level names such as
``"DEBUG"`` or numeric values such as ``"10"``).

Examples
--------
>>> from esp_yaml._logging import get_logger
>>> get_logger("esp_yaml.builders").name
'esp_yaml.builders'
"""

from __future__ import annotations

import logging
import os
import sys

from ._constants import LOG_LEVEL_ENV

LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(name)s:%(lineno)d] %(message)s"

_LEVEL_NAMES: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}


def resolve_env_log_level() -> int | None:
    """Return the logging level named by ``ESP_YAML_LOG_LEVEL``, or None."""
    raw = os.environ.get(LOG_LEVEL_ENV)
    if not raw:
        return None
    value = raw.strip().upper()
    if value.isdigit():
        return int(value)
    return _LEVEL_NAMES.get(value)


def setup_logging(level: int | None = None) -> None:
    """Configure the root logger with one stream handler on stderr.

    Parameters
    ----------
    level : int or None, optional
        Explicit logging level. When ``None`` the environment is consulted and
        ``WARNING`` is used if nothing is set.
    """
    if level is None:
        level = resolve_env_log_level() or logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT)
    )
    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return the logger registered under ``name``."""
    return logging.getLogger(name)


__all__ = ["get_logger", "resolve_env_log_level", "setup_logging"]
