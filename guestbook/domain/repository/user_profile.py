"""User profile repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from guestbook.domain.model.user_profile import UserProfile
from guestbook.domain.value import UserId


class UserProfileRepository(ABC):
    """Lookup of live display names and emails."""

    @abstractmethod
    async def find_by_user_id(self, user_id: UserId) -> Optional[UserProfile]:
        """Find a profile by user ID."""
        pass

    @abstractmethod
    async def find_by_user_ids(self, user_ids: Sequence[UserId]) -> List[UserProfile]:
        """Find profiles for several users (batch query)."""
        pass
