"""PostgreSQL implementation of UserProfile repository."""

from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.domain.model import UserProfile
from guestbook.domain.repository import UserProfileRepository
from guestbook.domain.value import UserId
from guestbook.persistence.mappers import row_to_user_profile
from guestbook.persistence.tables import user_profiles_table


class PostgresUserProfileRepository(UserProfileRepository):
    """PostgreSQL implementation of UserProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_user_id(self, user_id: UserId) -> Optional[UserProfile]:
        """Find a profile by user ID."""
        stmt = select(user_profiles_table).where(
            user_profiles_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user_profile(row._asdict()) if row else None

    async def find_by_user_ids(self, user_ids: Sequence[UserId]) -> List[UserProfile]:
        """Find profiles for several users."""
        if not user_ids:
            return []
        stmt = select(user_profiles_table).where(
            user_profiles_table.c.user_id.in_(list(user_ids))
        )
        result = await self.session.execute(stmt)
        return [row_to_user_profile(row._asdict()) for row in result.fetchall()]
