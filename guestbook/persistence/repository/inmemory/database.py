"""Shared state for the in-memory repositories.

Repositories are request-scoped but the data they see must outlive a
request, so all of them read and write one ``InMemoryDatabase``.
"""

from dataclasses import dataclass, field
from uuid import UUID

from guestbook.domain.model import (
    ChatMessage,
    ChatSession,
    Entry,
    Reaction,
    Tombstone,
    UserProfile,
)
from guestbook.domain.value import ChatMessageId, ChatSessionId, EntryId, UserId


@dataclass
class InMemoryDatabase:
    """Tables as dicts keyed by primary key."""

    entries: dict[EntryId, Entry] = field(default_factory=dict)
    reactions: dict[tuple[EntryId, str], Reaction] = field(default_factory=dict)
    tombstones: dict[tuple[str, UUID], Tombstone] = field(default_factory=dict)
    chat_sessions: dict[ChatSessionId, ChatSession] = field(default_factory=dict)
    chat_messages: dict[ChatMessageId, ChatMessage] = field(default_factory=dict)
    profiles: dict[UserId, UserProfile] = field(default_factory=dict)

    def add_chat_message(self, message: ChatMessage) -> ChatMessage:
        """Seed a transcript message (the chat relay's job in production)."""
        if message.session_id not in self.chat_sessions:
            self.chat_sessions[message.session_id] = ChatSession(
                id=message.session_id, user_id=message.user_id
            )
        self.chat_messages[message.id] = message
        return message

    def add_profile(self, profile: UserProfile) -> UserProfile:
        self.profiles[profile.user_id] = profile
        return profile
