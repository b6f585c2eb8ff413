#!/usr/bin/env python3
"""Apply database migrations, reporting failures to Logfire."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from onboard.config import Settings
from onboard.util.logging import setup_logging
from onboard.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Upgrade the database to ``revision``."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    with logfire.span("run_migrations", revision=revision):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy rather than serve against a half-migrated schema
            raise

    logfire.info("Database migrations completed", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
