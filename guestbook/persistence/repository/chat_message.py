"""PostgreSQL implementation of the chat message repository."""

from typing import Collection, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.domain.model import ChatMessage
from guestbook.domain.repository import ChatMessageRepository
from guestbook.domain.value import ChatMessageId, UserId
from guestbook.persistence.mappers import row_to_chat_message
from guestbook.persistence.repository._filters import like_pattern
from guestbook.persistence.tables import chat_messages_table, chat_sessions_table

# Messages joined with their session's owner
_messages_with_owner = chat_messages_table.outerjoin(
    chat_sessions_table,
    chat_messages_table.c.session_id == chat_sessions_table.c.id,
)


class PostgresChatMessageRepository(ChatMessageRepository):
    """Read-only access to the chat relay's transcript tables."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, message_id: ChatMessageId) -> Optional[ChatMessage]:
        """Find a chat message by ID."""
        stmt = (
            select(chat_messages_table, chat_sessions_table.c.user_id)
            .select_from(_messages_with_owner)
            .where(chat_messages_table.c.id == message_id)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_chat_message(row._asdict()) if row else None

    async def find_for_moderation(
        self,
        exclude_ids: Collection[ChatMessageId] = (),
        q: Optional[str] = None,
        user_id: Optional[UserId] = None,
        anonymous_only: bool = False,
        limit: int = 30,
    ) -> List[ChatMessage]:
        """Find messages newest first, skipping excluded ids."""
        stmt = (
            select(chat_messages_table, chat_sessions_table.c.user_id)
            .select_from(_messages_with_owner)
            .where(*_filters(exclude_ids, q, user_id, anonymous_only))
            .order_by(chat_messages_table.c.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_chat_message(row._asdict()) for row in result.fetchall()]

    async def count_for_moderation(
        self,
        exclude_ids: Collection[ChatMessageId] = (),
        q: Optional[str] = None,
        user_id: Optional[UserId] = None,
        anonymous_only: bool = False,
    ) -> int:
        """Count messages matching the moderation filters."""
        stmt = (
            select(func.count())
            .select_from(_messages_with_owner)
            .where(*_filters(exclude_ids, q, user_id, anonymous_only))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()


def _filters(
    exclude_ids: Collection[ChatMessageId],
    q: Optional[str],
    user_id: Optional[UserId],
    anonymous_only: bool,
) -> list:
    conditions = []
    if exclude_ids:
        conditions.append(chat_messages_table.c.id.not_in(list(exclude_ids)))
    if q:
        conditions.append(
            chat_messages_table.c.content.ilike(like_pattern(q), escape="\\")
        )
    if anonymous_only:
        conditions.append(chat_sessions_table.c.user_id.is_(None))
    elif user_id is not None:
        conditions.append(chat_sessions_table.c.user_id == user_id)
    return conditions
