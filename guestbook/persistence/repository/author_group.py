"""PostgreSQL implementation of the author summary repository."""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.domain.model import AuthorPostGroup
from guestbook.domain.repository import AuthorGroupRepository
from guestbook.persistence.mappers import row_to_author_group
from guestbook.persistence.tables import author_groups_view


class PostgresAuthorGroupRepository(AuthorGroupRepository):
    """Reads the ``admin_post_user_groups`` view."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_all(self, limit: int = 100, offset: int = 0) -> List[AuthorPostGroup]:
        """List author groups, most posts first."""
        total = author_groups_view.c.active_count + author_groups_view.c.deleted_count
        stmt = (
            select(author_groups_view)
            .order_by(total.desc(), author_groups_view.c.group_key)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_author_group(row._asdict()) for row in result.fetchall()]
