"""Domain model entities for the guestbook."""

from guestbook.domain.model.chat import ChatMessage, ChatSession
from guestbook.domain.model.entry import Entry
from guestbook.domain.model.moderation import (
    AuthorPostGroup,
    ModerationPost,
    PostAuthor,
    Tombstone,
)
from guestbook.domain.model.reaction import Reaction, ReactionStats
from guestbook.domain.model.user_profile import UserProfile

__all__ = [
    "AuthorPostGroup",
    "ChatMessage",
    "ChatSession",
    "Entry",
    "ModerationPost",
    "PostAuthor",
    "Reaction",
    "ReactionStats",
    "Tombstone",
    "UserProfile",
]
