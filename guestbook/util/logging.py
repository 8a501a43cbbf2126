"""Stdlib logging setup for third-party libraries.

Guestbook code logs through logfire; uvicorn, asyncpg, SQLAlchemy and
alembic still use ``logging`` and are configured here.
"""

import logging
import sys

from guestbook.config import Settings

_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging(settings: Settings) -> None:
    """Set root level and format, and quiet chatty libraries.

    Args:
        settings: Application settings (``debug`` raises verbosity)
    """
    level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=_LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    quiet = {
        "asyncpg": logging.WARNING,
        "uvicorn.access": logging.WARNING,
        "sqlalchemy.engine": logging.INFO if settings.debug else logging.WARNING,
    }
    for name, name_level in quiet.items():
        logging.getLogger(name).setLevel(name_level)

    logging.getLogger(__name__).info(
        "Logging configured for %s at %s",
        settings.environment,
        logging.getLevelName(level),
    )
