"""Domain value objects for the guestbook."""

from guestbook.domain.value.identifiers import (
    ChatMessageId,
    ChatSessionId,
    EntryId,
    UserId,
)
from guestbook.domain.value.identity import Identity
from guestbook.domain.value.types import (
    ContentType,
    EntryStatus,
    GlobalPostId,
    PostSource,
    ReactionValue,
    StatusFilter,
    VisitorKey,
)

__all__ = [
    # Identifiers
    "EntryId",
    "UserId",
    "ChatMessageId",
    "ChatSessionId",
    # Types
    "ContentType",
    "EntryStatus",
    "GlobalPostId",
    "Identity",
    "PostSource",
    "ReactionValue",
    "StatusFilter",
    "VisitorKey",
]
