#!/usr/bin/env python3
"""Apply the Agora schema migrations.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade to revision
    python scripts/run_migrations.py -1         # step back (also: base)
"""

import sys

import logfire
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from agora.config import Settings
from agora.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Migrate the configured database to ``argv[0]`` (default head)."""
    settings = Settings()
    configure_logfire(settings)

    target = argv[0] if argv else "head"
    database = make_url(settings.database.url)

    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database.url)

    with logfire.span(
        "migrations.run",
        target=target,
        host=database.host,
        database=database.database,
    ):
        try:
            if target == "base" or target.startswith("-"):
                command.downgrade(alembic_cfg, target)
            else:
                command.upgrade(alembic_cfg, target)
        except Exception as e:
            logfire.error(
                "Schema migration failed",
                target=target,
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy rather than serve a half-migrated schema
            raise

        logfire.info("Schema is at target revision", target=target)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
