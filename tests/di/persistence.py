"""Mock persistence providers for testing."""

from dishka import Scope, provide

from guestbook.domain.repository import (
    AuthorGroupRepository,
    ChatMessageRepository,
    EntryRepository,
    ReactionRepository,
    TombstoneRepository,
    UserProfileRepository,
)
from guestbook.persistence.repository.inmemory import (
    InMemoryAuthorGroupRepository,
    InMemoryChatMessageRepository,
    InMemoryDatabase,
    InMemoryEntryRepository,
    InMemoryReactionRepository,
    InMemoryTombstoneRepository,
    InMemoryUserProfileRepository,
)
from guestbook.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The database lives in APP scope so that data written in one request
    is visible to the next (E2E flows). Each test builds its own
    container, so tests stay isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_database(self) -> InMemoryDatabase:
        """Provide the shared in-memory tables."""
        return InMemoryDatabase()

    @provide(scope=Scope.REQUEST)
    def get_entry_repository(self, db: InMemoryDatabase) -> EntryRepository:
        """Provide in-memory entry repository."""
        return InMemoryEntryRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_reaction_repository(self, db: InMemoryDatabase) -> ReactionRepository:
        """Provide in-memory reaction repository."""
        return InMemoryReactionRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_tombstone_repository(self, db: InMemoryDatabase) -> TombstoneRepository:
        """Provide in-memory tombstone repository."""
        return InMemoryTombstoneRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_chat_message_repository(
        self, db: InMemoryDatabase
    ) -> ChatMessageRepository:
        """Provide in-memory chat message repository."""
        return InMemoryChatMessageRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_user_profile_repository(
        self, db: InMemoryDatabase
    ) -> UserProfileRepository:
        """Provide in-memory user profile repository."""
        return InMemoryUserProfileRepository(db)

    @provide(scope=Scope.REQUEST)
    def get_author_group_repository(
        self, db: InMemoryDatabase
    ) -> AuthorGroupRepository:
        """Provide in-memory author summary repository."""
        return InMemoryAuthorGroupRepository(db)
