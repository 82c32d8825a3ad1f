#!/usr/bin/env python3
"""Apply comment schema migrations.

Usage:
    python scripts/run_migrations.py                      # upgrade to head
    python scripts/run_migrations.py --downgrade base     # roll everything back
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from canopy.config import Settings
from canopy.util.logging import setup_logging
from canopy.util.observability import configure_logfire


def main() -> int:
    parser = argparse.ArgumentParser(description="Apply comment schema migrations")
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument("--downgrade", action="store_true")
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    direction = "downgrade" if args.downgrade else "upgrade"
    config = Config("alembic.ini")
    with logfire.span("migrations.run", revision=args.revision, direction=direction):
        try:
            if args.downgrade:
                command.downgrade(config, args.revision)
            else:
                command.upgrade(config, args.revision)
        except Exception:
            # Fail the deploy rather than start on a half-migrated schema
            logfire.exception("Database migration failed", revision=args.revision)
            raise
    logfire.info("Database migrations completed", revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
