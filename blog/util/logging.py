"""Stdlib logging for third-party libraries.

Application code logs through logfire; this only sets levels and format for
uvicorn, SQLAlchemy and anything else using ``logging``.
"""

import logging
import sys

from blog.config import Settings

_LEVELS = {
    "production": logging.WARNING,
    "staging": logging.INFO,
    "development": logging.INFO,
    "test": logging.WARNING,
}

# Too chatty at INFO; SQL is traced by logfire instead
_QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.debug else _LEVELS[settings.environment]
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        stream=sys.stdout,
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).info(
        "Logging configured for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )
