"""PostgreSQL repository implementations."""

from guestbook.persistence.repository.author_group import PostgresAuthorGroupRepository
from guestbook.persistence.repository.chat_message import PostgresChatMessageRepository
from guestbook.persistence.repository.entry import PostgresEntryRepository
from guestbook.persistence.repository.reaction import PostgresReactionRepository
from guestbook.persistence.repository.tombstone import PostgresTombstoneRepository
from guestbook.persistence.repository.user_profile import PostgresUserProfileRepository

__all__ = [
    "PostgresAuthorGroupRepository",
    "PostgresChatMessageRepository",
    "PostgresEntryRepository",
    "PostgresReactionRepository",
    "PostgresTombstoneRepository",
    "PostgresUserProfileRepository",
]
