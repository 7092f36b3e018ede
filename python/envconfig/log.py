"""Opt-in logging setup for envconfig.

Library modules only create loggers (``logging.getLogger(__name__)``); the
package logger carries a NullHandler, so nothing is printed unless an
application opts in:

    from envconfig.log import configure_logging
    configure_logging()            # level from ENVCONFIG_LOG_LEVEL, else WARNING
    configure_logging("DEBUG")     # explicit level

Environment Variables:
    ENVCONFIG_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
        Default: WARNING

Log Format Example:
    [INFO] envconfig.models.binding: Bound AppSettings (prefix=myapp, 4 fields)

Raw configuration values are never logged, only names and types.
"""

from __future__ import annotations

import logging
import os
import sys

from envconfig.exceptions import ConfigBindingError
from envconfig.models import EnvConfig

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
LOG_PREFIX = "ENVCONFIG"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_PACKAGE_LOGGER = "envconfig"


class LoggingSettings(EnvConfig):
    """Settings of envconfig itself, read from ``ENVCONFIG_*`` variables."""

    log_level: str = "WARNING"


def _level_from_env() -> str:
    try:
        settings = LoggingSettings.bind(os.environ, LOG_PREFIX)
    except ConfigBindingError as e:
        print(f"Warning: {e}; using WARNING", file=sys.stderr)
        return "WARNING"
    return settings.log_level


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stream handler to the ``envconfig`` logger.

    Calling it again replaces the level but never adds a second handler.

    Args:
        level: Level name or number; None reads ENVCONFIG_LOG_LEVEL

    Returns:
        The configured package logger
    """
    if level is None:
        level = _level_from_env()
    if isinstance(level, str):
        name = level.upper()
        if name not in VALID_LEVELS:
            print(
                f"Warning: Invalid log level '{level}', using WARNING. "
                f"Valid levels: {', '.join(VALID_LEVELS)}",
                file=sys.stderr,
            )
            name = "WARNING"
        level = getattr(logging, name)

    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(level)
    if not any(getattr(h, "_envconfig", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._envconfig = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


__all__ = ["LoggingSettings", "configure_logging", "LOG_FORMAT", "VALID_LEVELS"]
