"""Comment storage providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from canopy.config import Settings
from canopy.domain.repository import CommentRepository
from canopy.persistence.database import create_engine, create_session_factory
from canopy.persistence.repository import PostgresCommentRepository
from canopy.util.di.base import ProviderBase
from canopy.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Where comments are stored."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL storage: one pooled engine, one session per request."""

    __is_mock__ = False

    comment_repository = provide(
        PostgresCommentRepository, provides=CommentRepository, scope=Scope.REQUEST
    )

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Session for one request, committed when the request succeeds.

        A create or a cascading delete is therefore applied all or nothing.
        """
        async with session_factory() as session:
            try:
                yield session
            except Exception as e:
                logfire.warn("Rolling back comment session", error=str(e))
                await session.rollback()
                raise
            await session.commit()
