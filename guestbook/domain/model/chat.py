"""Chat transcript entities.

Transcripts are written by the chat relay and are append-only from this
service's point of view: they are read for moderation and never updated.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from guestbook.domain.model.common import DomainModel, utcnow
from guestbook.domain.value import ChatMessageId, ChatSessionId, UserId


class ChatSession(DomainModel):
    """A conversation owned by a user (or no one, for guest sessions)."""

    id: ChatSessionId
    user_id: Optional[UserId] = None
    title: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class ChatMessage(DomainModel):
    """One message of a chat session.

    ``user_id`` is the owning session's user, joined in on read.
    """

    id: ChatMessageId
    session_id: ChatSessionId
    user_id: Optional[UserId] = None
    role: str
    content: str
    model: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
