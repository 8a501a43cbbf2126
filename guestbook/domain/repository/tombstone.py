"""Tombstone repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from guestbook.domain.model.moderation import Tombstone
from guestbook.domain.value import PostSource


class TombstoneRepository(ABC):
    """Repository for moderation tombstones keyed by ``(source, source_ref_id)``."""

    @abstractmethod
    async def find(self, source: PostSource, source_ref_id: UUID) -> Optional[Tombstone]:
        """Find the tombstone for a record, if any."""
        pass

    @abstractmethod
    async def upsert(self, tombstone: Tombstone) -> Tombstone:
        """Create the tombstone, or refresh ``deleted_at`` if present."""
        pass

    @abstractmethod
    async def delete(self, source: PostSource, source_ref_id: UUID) -> bool:
        """Remove a tombstone.

        Returns:
            True if a tombstone was removed
        """
        pass

    @abstractmethod
    async def find_ref_ids(self, source: PostSource, limit: int) -> set[UUID]:
        """Fetch tombstoned record ids for one source, at most ``limit``."""
        pass
