#!/usr/bin/env python3
"""Apply database migrations with Logfire error tracking."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from guestbook.config import Settings
from guestbook.util.observability import configure_logfire


def main() -> int:
    """Upgrade the schema to head; a failure aborts the deploy."""
    settings = Settings()
    configure_logfire(settings)

    try:
        logfire.info("Running guestbook migrations", environment=settings.environment)

        # env.py reads the database URL from settings
        alembic_cfg = Config("alembic.ini")
        command.upgrade(alembic_cfg, "head")

        logfire.info("Guestbook migrations applied")
        return 0

    except Exception as e:
        logfire.error(
            "Guestbook migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # The container must not start against a half-migrated schema
        raise


if __name__ == "__main__":
    sys.exit(main())
