"""PostgreSQL engine and sessions for comment storage."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from canopy.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Pooled asyncpg engine configured from ``DATABASE__*`` settings.

    SQL is echoed when ``DEBUG`` is set.
    """
    database = settings.database
    return create_async_engine(
        database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions that keep loaded rows usable after commit.

    Repositories flush explicitly, so autoflush is off.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
