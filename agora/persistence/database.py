"""Async engine and session factory for PostgreSQL."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from agora.config import DatabaseSettings

# Shows up in pg_stat_activity
APPLICATION_NAME = "agora-api"


def create_engine(settings: DatabaseSettings, echo: bool = False) -> AsyncEngine:
    """Create the asyncpg-backed engine.

    Args:
        settings: Database settings
        echo: Log every SQL statement
    """
    return create_async_engine(
        settings.url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        connect_args={"server_settings": {"application_name": APPLICATION_NAME}},
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the per-request session factory.

    Repositories issue Core statements and read plain rows back, so
    nothing needs expiring or autoflushing.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
