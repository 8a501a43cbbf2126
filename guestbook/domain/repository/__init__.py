"""Repository interfaces for the guestbook domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from guestbook.domain.repository.author_group import AuthorGroupRepository
from guestbook.domain.repository.chat_message import ChatMessageRepository
from guestbook.domain.repository.entry import EntryRepository
from guestbook.domain.repository.reaction import ReactionRepository
from guestbook.domain.repository.tombstone import TombstoneRepository
from guestbook.domain.repository.user_profile import UserProfileRepository

__all__ = [
    "AuthorGroupRepository",
    "ChatMessageRepository",
    "EntryRepository",
    "ReactionRepository",
    "TombstoneRepository",
    "UserProfileRepository",
]
