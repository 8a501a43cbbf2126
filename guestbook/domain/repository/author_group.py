"""Author summary repository interface."""

from abc import ABC, abstractmethod
from typing import List

from guestbook.domain.model.moderation import AuthorPostGroup


class AuthorGroupRepository(ABC):
    """Per-identity post and reaction counts (backed by a summary view)."""

    @abstractmethod
    async def find_all(self, limit: int = 100, offset: int = 0) -> List[AuthorPostGroup]:
        """List author groups ordered by total post count, largest first."""
        pass
