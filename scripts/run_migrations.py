#!/usr/bin/env python3
"""Apply Alembic migrations to the configured database.

Usage:
    python scripts/run_migrations.py             # upgrade to head
    python scripts/run_migrations.py <revision>  # upgrade to a revision
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from agora.config import Settings
from agora.util.logging import setup_logging
from agora.util.observability import configure_logfire


def main() -> int:
    """Upgrade the schema and report failures to Logfire."""
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    revision = sys.argv[1] if len(sys.argv) > 1 else "head"

    try:
        logfire.info("Applying migrations", revision=revision)
        command.upgrade(Config("alembic.ini"), revision)
        logfire.info("Migrations applied", revision=revision)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            revision=revision,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so a deploy step fails instead of running on a stale schema
        raise


if __name__ == "__main__":
    sys.exit(main())
