"""PostgreSQL implementation of Entry repository."""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import and_, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.domain.model import Entry
from guestbook.domain.repository import EntryRepository
from guestbook.domain.value import EntryId, EntryStatus, StatusFilter, UserId
from guestbook.persistence.mappers import entry_to_dict, row_to_entry
from guestbook.persistence.repository._filters import like_pattern
from guestbook.persistence.tables import entries_table


class PostgresEntryRepository(EntryRepository):
    """PostgreSQL implementation of EntryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, entry_id: EntryId) -> Optional[Entry]:
        """Find an entry by ID."""
        stmt = select(entries_table).where(entries_table.c.id == entry_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_entry(row._asdict()) if row else None

    async def find_by_ids(self, entry_ids: Sequence[EntryId]) -> List[Entry]:
        """Find several entries by ID."""
        if not entry_ids:
            return []
        stmt = select(entries_table).where(entries_table.c.id.in_(list(entry_ids)))
        result = await self.session.execute(stmt)
        return [row_to_entry(row._asdict()) for row in result.fetchall()]

    async def find_page(
        self,
        parent_id: Optional[EntryId] = None,
        status: StatusFilter = StatusFilter.ACTIVE,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Entry]:
        """Find one page of roots or direct children."""
        order = (
            entries_table.c.created_at.asc()
            if parent_id
            else entries_table.c.created_at.desc()
        )
        stmt = (
            select(entries_table)
            .where(*_listing_filters(parent_id, status, search))
            .order_by(order, entries_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_entry(row._asdict()) for row in result.fetchall()]

    async def count(
        self,
        parent_id: Optional[EntryId] = None,
        status: StatusFilter = StatusFilter.ACTIVE,
        search: Optional[str] = None,
    ) -> int:
        """Count entries matching the listing filters."""
        stmt = (
            select(func.count())
            .select_from(entries_table)
            .where(*_listing_filters(parent_id, status, search))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def count_roots_by_status(self) -> dict[EntryStatus, int]:
        """Count root entries per status."""
        stmt = (
            select(entries_table.c.status, func.count())
            .where(entries_table.c.parent_id.is_(None))
            .group_by(entries_table.c.status)
        )
        result = await self.session.execute(stmt)
        counts = {status: 0 for status in EntryStatus}
        for status, count in result.fetchall():
            counts[EntryStatus(status)] = count
        return counts

    async def count_active_children(
        self, parent_ids: Sequence[EntryId]
    ) -> dict[EntryId, int]:
        """Count active direct children per parent (one grouped query)."""
        counts: dict[EntryId, int] = {pid: 0 for pid in parent_ids}
        if not parent_ids:
            return counts
        stmt = (
            select(entries_table.c.parent_id, func.count())
            .where(
                and_(
                    entries_table.c.parent_id.in_(list(parent_ids)),
                    entries_table.c.status == EntryStatus.ACTIVE.value,
                )
            )
            .group_by(entries_table.c.parent_id)
        )
        result = await self.session.execute(stmt)
        for parent_id, count in result.fetchall():
            counts[EntryId(parent_id)] = count
        return counts

    async def find_children_of(self, parent_ids: Sequence[EntryId]) -> List[Entry]:
        """Find direct children of all given parents, any status."""
        if not parent_ids:
            return []
        stmt = (
            select(entries_table)
            .where(entries_table.c.parent_id.in_(list(parent_ids)))
            .order_by(entries_table.c.created_at.asc(), entries_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_entry(row._asdict()) for row in result.fetchall()]

    async def find_by_author(
        self,
        author_user_id: Optional[UserId] = None,
        author_keys: Sequence[str] = (),
        limit: int = 30,
    ) -> List[Entry]:
        """Find entries by a user id or any of the given visitor keys."""
        conditions = []
        if author_user_id is not None:
            conditions.append(entries_table.c.author_user_id == author_user_id)
        if author_keys:
            conditions.append(entries_table.c.author_key.in_(list(author_keys)))
        if not conditions:
            return []
        stmt = (
            select(entries_table)
            .where(or_(*conditions))
            .order_by(entries_table.c.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_entry(row._asdict()) for row in result.fetchall()]

    async def count_created_since(
        self,
        since: datetime,
        author_user_id: Optional[UserId] = None,
        author_keys: Sequence[str] = (),
        origin: Optional[str] = None,
    ) -> int:
        """Count entries created since a point in time."""
        conditions = [entries_table.c.created_at >= since]
        by_author = []
        if author_user_id is not None:
            by_author.append(entries_table.c.author_user_id == author_user_id)
        if author_keys:
            by_author.append(entries_table.c.author_key.in_(list(author_keys)))
        if by_author:
            conditions.append(or_(*by_author))
        if origin is not None:
            conditions.append(entries_table.c.origin == origin)
        stmt = select(func.count()).select_from(entries_table).where(and_(*conditions))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_for_moderation(
        self,
        q: Optional[str] = None,
        author_user_id: Optional[UserId] = None,
        anonymous_only: bool = False,
        limit: int = 30,
    ) -> List[Entry]:
        """Find active entries for the moderation listing."""
        stmt = (
            select(entries_table)
            .where(*_moderation_filters(q, author_user_id, anonymous_only))
            .order_by(entries_table.c.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_entry(row._asdict()) for row in result.fetchall()]

    async def count_for_moderation(
        self,
        q: Optional[str] = None,
        author_user_id: Optional[UserId] = None,
        anonymous_only: bool = False,
    ) -> int:
        """Count active entries for the moderation listing."""
        stmt = (
            select(func.count())
            .select_from(entries_table)
            .where(*_moderation_filters(q, author_user_id, anonymous_only))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def find_deleted_ids(self, limit: int) -> set[EntryId]:
        """Fetch ids of deleted entries, most recently deleted first."""
        stmt = (
            select(entries_table.c.id)
            .where(entries_table.c.status == EntryStatus.DELETED.value)
            .order_by(entries_table.c.deleted_at.desc().nulls_last())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return {EntryId(row[0]) for row in result.fetchall()}

    async def save(self, entry: Entry) -> Entry:
        """Insert a new entry."""
        stmt = insert(entries_table).values(**entry_to_dict(entry))
        await self.session.execute(stmt)
        await self.session.flush()
        return entry

    async def update(self, entry: Entry) -> Entry:
        """Persist status, content and timestamp changes."""
        data = entry_to_dict(entry)
        stmt = (
            update(entries_table)
            .where(entries_table.c.id == entry.id)
            .values(
                content=data["content"],
                status=data["status"],
                deleted_at=data["deleted_at"],
                updated_at=data["updated_at"],
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return entry


def _listing_filters(
    parent_id: Optional[EntryId], status: StatusFilter, search: Optional[str]
) -> list:
    conditions = [
        entries_table.c.parent_id == parent_id
        if parent_id
        else entries_table.c.parent_id.is_(None)
    ]
    if status != StatusFilter.ALL:
        conditions.append(entries_table.c.status == status.value)
    if search:
        pattern = like_pattern(search)
        # Content of deleted entries is never searchable, only the name
        conditions.append(
            or_(
                and_(
                    entries_table.c.status == EntryStatus.ACTIVE.value,
                    entries_table.c.content.ilike(pattern, escape="\\"),
                ),
                entries_table.c.author_name.ilike(pattern, escape="\\"),
            )
        )
    return conditions


def _moderation_filters(
    q: Optional[str], author_user_id: Optional[UserId], anonymous_only: bool
) -> list:
    conditions = [entries_table.c.status == EntryStatus.ACTIVE.value]
    if q:
        conditions.append(entries_table.c.content.ilike(like_pattern(q), escape="\\"))
    if anonymous_only:
        conditions.append(entries_table.c.author_user_id.is_(None))
    elif author_user_id is not None:
        conditions.append(entries_table.c.author_user_id == author_user_id)
    return conditions
