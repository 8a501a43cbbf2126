"""Chat message repository interface (read-only)."""

from abc import ABC, abstractmethod
from typing import Collection, List, Optional

from guestbook.domain.model.chat import ChatMessage
from guestbook.domain.value import ChatMessageId, UserId


class ChatMessageRepository(ABC):
    """Read access to chat transcripts.

    The chat relay owns these rows; this service never writes them.
    Every returned message carries its session's ``user_id``.
    """

    @abstractmethod
    async def find_by_id(self, message_id: ChatMessageId) -> Optional[ChatMessage]:
        """Find a chat message by ID."""
        pass

    @abstractmethod
    async def find_for_moderation(
        self,
        exclude_ids: Collection[ChatMessageId] = (),
        q: Optional[str] = None,
        user_id: Optional[UserId] = None,
        anonymous_only: bool = False,
        limit: int = 30,
    ) -> List[ChatMessage]:
        """Find messages newest first, skipping ``exclude_ids``.

        Args:
            exclude_ids: Tombstoned message ids
            q: Case-insensitive content filter
            user_id: Restrict to sessions owned by this user
            anonymous_only: Restrict to sessions without an owner
            limit: Maximum number of messages to return
        """
        pass

    @abstractmethod
    async def count_for_moderation(
        self,
        exclude_ids: Collection[ChatMessageId] = (),
        q: Optional[str] = None,
        user_id: Optional[UserId] = None,
        anonymous_only: bool = False,
    ) -> int:
        """Count messages matching the same filters as ``find_for_moderation``."""
        pass
