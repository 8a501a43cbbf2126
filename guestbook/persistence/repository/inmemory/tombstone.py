"""In-memory tombstone repository for testing."""

from typing import Optional
from uuid import UUID

from guestbook.domain.model import Tombstone
from guestbook.domain.repository import TombstoneRepository
from guestbook.domain.value import PostSource

from .database import InMemoryDatabase


class InMemoryTombstoneRepository(TombstoneRepository):
    """In-memory implementation of TombstoneRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self.db = db

    async def find(self, source: PostSource, source_ref_id: UUID) -> Optional[Tombstone]:
        return self.db.tombstones.get((source.value, source_ref_id))

    async def upsert(self, tombstone: Tombstone) -> Tombstone:
        self.db.tombstones[(tombstone.source.value, tombstone.source_ref_id)] = tombstone
        return tombstone

    async def delete(self, source: PostSource, source_ref_id: UUID) -> bool:
        return self.db.tombstones.pop((source.value, source_ref_id), None) is not None

    async def find_ref_ids(self, source: PostSource, limit: int) -> set[UUID]:
        refs = [ref for (src, ref) in self.db.tombstones if src == source.value]
        return set(refs[:limit])
