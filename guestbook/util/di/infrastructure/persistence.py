"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from guestbook.config import Settings
from guestbook.domain.repository import (
    AuthorGroupRepository,
    ChatMessageRepository,
    EntryRepository,
    ReactionRepository,
    TombstoneRepository,
    UserProfileRepository,
)
from guestbook.persistence.database import create_engine, create_session_factory
from guestbook.persistence.repository import (
    PostgresAuthorGroupRepository,
    PostgresChatMessageRepository,
    PostgresEntryRepository,
    PostgresReactionRepository,
    PostgresTombstoneRepository,
    PostgresUserProfileRepository,
)
from guestbook.util.di.base import ProviderBase
from guestbook.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings.database, echo=settings.debug)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_entry_repository(self, session: AsyncSession) -> EntryRepository:
        """Provide Entry repository."""
        return PostgresEntryRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_reaction_repository(self, session: AsyncSession) -> ReactionRepository:
        """Provide Reaction repository."""
        return PostgresReactionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_tombstone_repository(self, session: AsyncSession) -> TombstoneRepository:
        """Provide Tombstone repository."""
        return PostgresTombstoneRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_chat_message_repository(
        self, session: AsyncSession
    ) -> ChatMessageRepository:
        """Provide read-only ChatMessage repository."""
        return PostgresChatMessageRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_user_profile_repository(
        self, session: AsyncSession
    ) -> UserProfileRepository:
        """Provide UserProfile repository."""
        return PostgresUserProfileRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_author_group_repository(
        self, session: AsyncSession
    ) -> AuthorGroupRepository:
        """Provide author summary repository."""
        return PostgresAuthorGroupRepository(session)
