"""PostgreSQL implementation of Tombstone repository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.domain.model import Tombstone
from guestbook.domain.repository import TombstoneRepository
from guestbook.domain.value import PostSource
from guestbook.persistence.mappers import row_to_tombstone, tombstone_to_dict
from guestbook.persistence.tables import tombstones_table


class PostgresTombstoneRepository(TombstoneRepository):
    """PostgreSQL implementation of TombstoneRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find(self, source: PostSource, source_ref_id: UUID) -> Optional[Tombstone]:
        """Find the tombstone for a record."""
        stmt = select(tombstones_table).where(
            and_(
                tombstones_table.c.source == source.value,
                tombstones_table.c.source_ref_id == source_ref_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_tombstone(row._asdict()) if row else None

    async def upsert(self, tombstone: Tombstone) -> Tombstone:
        """Create or refresh a tombstone."""
        stmt = insert(tombstones_table).values(**tombstone_to_dict(tombstone))
        stmt = stmt.on_conflict_do_update(
            index_elements=[
                tombstones_table.c.source,
                tombstones_table.c.source_ref_id,
            ],
            set_={"deleted_at": stmt.excluded.deleted_at},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return tombstone

    async def delete(self, source: PostSource, source_ref_id: UUID) -> bool:
        """Remove a tombstone."""
        stmt = delete(tombstones_table).where(
            and_(
                tombstones_table.c.source == source.value,
                tombstones_table.c.source_ref_id == source_ref_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def find_ref_ids(self, source: PostSource, limit: int) -> set[UUID]:
        """Fetch tombstoned ids for a source, most recent first."""
        stmt = (
            select(tombstones_table.c.source_ref_id)
            .where(tombstones_table.c.source == source.value)
            .order_by(tombstones_table.c.deleted_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return {row[0] for row in result.fetchall()}
