"""In-memory chat message repository for testing."""

from typing import Collection, List, Optional

from guestbook.domain.model import ChatMessage
from guestbook.domain.repository import ChatMessageRepository
from guestbook.domain.value import ChatMessageId, UserId

from .database import InMemoryDatabase


class InMemoryChatMessageRepository(ChatMessageRepository):
    """In-memory implementation of ChatMessageRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self.db = db

    async def find_by_id(self, message_id: ChatMessageId) -> Optional[ChatMessage]:
        return self.db.chat_messages.get(message_id)

    async def find_for_moderation(
        self,
        exclude_ids: Collection[ChatMessageId] = (),
        q: Optional[str] = None,
        user_id: Optional[UserId] = None,
        anonymous_only: bool = False,
        limit: int = 30,
    ) -> List[ChatMessage]:
        matches = self._filter(exclude_ids, q, user_id, anonymous_only)
        matches.sort(key=lambda m: m.created_at, reverse=True)
        return matches[:limit]

    async def count_for_moderation(
        self,
        exclude_ids: Collection[ChatMessageId] = (),
        q: Optional[str] = None,
        user_id: Optional[UserId] = None,
        anonymous_only: bool = False,
    ) -> int:
        return len(self._filter(exclude_ids, q, user_id, anonymous_only))

    def _filter(
        self,
        exclude_ids: Collection[ChatMessageId],
        q: Optional[str],
        user_id: Optional[UserId],
        anonymous_only: bool,
    ) -> List[ChatMessage]:
        excluded = set(exclude_ids)
        term = q.lower() if q else None
        return [
            m
            for m in self.db.chat_messages.values()
            if m.id not in excluded
            and (term is None or term in m.content.lower())
            and (not anonymous_only or m.user_id is None)
            and (user_id is None or m.user_id == user_id)
        ]
