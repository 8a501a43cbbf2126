"""Strongly typed identifiers for guestbook domain entities."""

from typing import NewType
from uuid import UUID

EntryId = NewType("EntryId", UUID)
UserId = NewType("UserId", UUID)
ChatMessageId = NewType("ChatMessageId", UUID)
ChatSessionId = NewType("ChatSessionId", UUID)
