"""In-memory user profile repository for testing."""

from typing import List, Optional, Sequence

from guestbook.domain.model import UserProfile
from guestbook.domain.repository import UserProfileRepository
from guestbook.domain.value import UserId

from .database import InMemoryDatabase


class InMemoryUserProfileRepository(UserProfileRepository):
    """In-memory implementation of UserProfileRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self.db = db

    async def find_by_user_id(self, user_id: UserId) -> Optional[UserProfile]:
        return self.db.profiles.get(user_id)

    async def find_by_user_ids(self, user_ids: Sequence[UserId]) -> List[UserProfile]:
        return [self.db.profiles[uid] for uid in user_ids if uid in self.db.profiles]
