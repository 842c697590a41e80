"""Standard library logging setup.

Agora's own code logs through logfire. Third-party libraries (uvicorn,
SQLAlchemy, asyncpg, alembic) use the standard ``logging`` module; their
records are forwarded to logfire so everything lands in one stream.
"""

import logging

import logfire

from agora.config import Settings

# Libraries that are chatty at INFO
QUIET_LOGGERS = ("asyncpg", "sqlalchemy.pool", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Route standard library logging into logfire.

    Args:
        settings: Application settings; ``debug`` lowers the level
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    # SQL echo is governed by the engine, not by this level
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )
