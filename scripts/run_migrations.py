#!/usr/bin/env python3
"""Upgrade the database schema, reporting failures to Logfire.

Usage: run_migrations.py [REVISION]   (defaults to head)
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from folio.config import Settings
from folio.util.logging import setup_logging
from folio.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(argv: list[str]) -> int:
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    revision = argv[0] if argv else "head"
    alembic_cfg = Config(str(ALEMBIC_INI))

    with logfire.span("run_migrations", revision=revision):
        try:
            command.upgrade(alembic_cfg, revision)
        except Exception:
            logfire.exception("Database migration failed", revision=revision)
            # The app must not start against a half-migrated schema
            raise

        logfire.info("Database migrated", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
