"""In-memory repository implementations for testing."""

from .author_group import InMemoryAuthorGroupRepository
from .chat_message import InMemoryChatMessageRepository
from .database import InMemoryDatabase
from .entry import InMemoryEntryRepository
from .reaction import InMemoryReactionRepository
from .tombstone import InMemoryTombstoneRepository
from .user_profile import InMemoryUserProfileRepository

__all__ = [
    "InMemoryAuthorGroupRepository",
    "InMemoryChatMessageRepository",
    "InMemoryDatabase",
    "InMemoryEntryRepository",
    "InMemoryReactionRepository",
    "InMemoryTombstoneRepository",
    "InMemoryUserProfileRepository",
]
