"""In-memory entry repository for testing."""

from datetime import datetime
from typing import List, Optional, Sequence

from guestbook.domain.model import Entry
from guestbook.domain.repository import EntryRepository
from guestbook.domain.value import EntryId, EntryStatus, StatusFilter, UserId

from .database import InMemoryDatabase


class InMemoryEntryRepository(EntryRepository):
    """In-memory implementation of EntryRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self.db = db

    async def find_by_id(self, entry_id: EntryId) -> Optional[Entry]:
        """Find an entry by ID."""
        return self.db.entries.get(entry_id)

    async def find_by_ids(self, entry_ids: Sequence[EntryId]) -> List[Entry]:
        """Find several entries by ID."""
        return [self.db.entries[eid] for eid in entry_ids if eid in self.db.entries]

    async def find_page(
        self,
        parent_id: Optional[EntryId] = None,
        status: StatusFilter = StatusFilter.ACTIVE,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Entry]:
        """Find one page of roots or direct children."""
        matches = self._listing(parent_id, status, search)
        # Stable sort then reverse keeps insertion order as the tie-breaker
        matches.sort(key=lambda e: e.created_at)
        if parent_id is None:
            matches.reverse()
        return matches[offset : offset + limit]

    async def count(
        self,
        parent_id: Optional[EntryId] = None,
        status: StatusFilter = StatusFilter.ACTIVE,
        search: Optional[str] = None,
    ) -> int:
        """Count entries matching the listing filters."""
        return len(self._listing(parent_id, status, search))

    async def count_roots_by_status(self) -> dict[EntryStatus, int]:
        """Count root entries per status."""
        counts = {status: 0 for status in EntryStatus}
        for entry in self.db.entries.values():
            if entry.parent_id is None:
                counts[entry.status] += 1
        return counts

    async def count_active_children(
        self, parent_ids: Sequence[EntryId]
    ) -> dict[EntryId, int]:
        """Count active direct children per parent."""
        counts: dict[EntryId, int] = {pid: 0 for pid in parent_ids}
        for entry in self.db.entries.values():
            if entry.parent_id in counts and entry.status == EntryStatus.ACTIVE:
                counts[entry.parent_id] += 1
        return counts

    async def find_children_of(self, parent_ids: Sequence[EntryId]) -> List[Entry]:
        """Find direct children of all given parents."""
        wanted = set(parent_ids)
        children = [e for e in self.db.entries.values() if e.parent_id in wanted]
        return sorted(children, key=lambda e: e.created_at)

    async def find_by_author(
        self,
        author_user_id: Optional[UserId] = None,
        author_keys: Sequence[str] = (),
        limit: int = 30,
    ) -> List[Entry]:
        """Find entries by a user id or any of the given keys."""
        keys = set(author_keys)
        matches = [
            e
            for e in self.db.entries.values()
            if (author_user_id is not None and e.author_user_id == author_user_id)
            or (e.author_key is not None and e.author_key in keys)
        ]
        matches.sort(key=lambda e: e.created_at)
        matches.reverse()
        return matches[:limit]

    async def count_created_since(
        self,
        since: datetime,
        author_user_id: Optional[UserId] = None,
        author_keys: Sequence[str] = (),
        origin: Optional[str] = None,
    ) -> int:
        """Count entries created since a point in time."""
        keys = set(author_keys)
        by_author = author_user_id is not None or bool(keys)
        return sum(
            1
            for e in self.db.entries.values()
            if e.created_at >= since
            and (origin is None or e.origin == origin)
            and (
                not by_author
                or (author_user_id is not None and e.author_user_id == author_user_id)
                or (e.author_key is not None and e.author_key in keys)
            )
        )

    async def find_for_moderation(
        self,
        q: Optional[str] = None,
        author_user_id: Optional[UserId] = None,
        anonymous_only: bool = False,
        limit: int = 30,
    ) -> List[Entry]:
        """Find active entries for the moderation listing."""
        matches = self._moderation(q, author_user_id, anonymous_only)
        matches.sort(key=lambda e: e.created_at)
        matches.reverse()
        return matches[:limit]

    async def count_for_moderation(
        self,
        q: Optional[str] = None,
        author_user_id: Optional[UserId] = None,
        anonymous_only: bool = False,
    ) -> int:
        """Count active entries for the moderation listing."""
        return len(self._moderation(q, author_user_id, anonymous_only))

    async def find_deleted_ids(self, limit: int) -> set[EntryId]:
        """Fetch ids of deleted entries."""
        deleted = [e for e in self.db.entries.values() if e.status == EntryStatus.DELETED]
        return {e.id for e in deleted[:limit]}

    async def save(self, entry: Entry) -> Entry:
        """Insert a new entry."""
        self.db.entries[entry.id] = entry
        return entry

    async def update(self, entry: Entry) -> Entry:
        """Replace a stored entry."""
        self.db.entries[entry.id] = entry
        return entry

    def _listing(
        self,
        parent_id: Optional[EntryId],
        status: StatusFilter,
        search: Optional[str],
    ) -> List[Entry]:
        term = search.lower() if search else None
        result = []
        for e in self.db.entries.values():
            if e.parent_id != parent_id:
                continue
            if status != StatusFilter.ALL and e.status.value != status.value:
                continue
            if term:
                name = (e.author_name or "").lower()
                # Content of deleted entries is never searchable, only the name
                content = e.content.lower() if e.status == EntryStatus.ACTIVE else ""
                if term not in content and term not in name:
                    continue
            result.append(e)
        return result

    def _moderation(
        self,
        q: Optional[str],
        author_user_id: Optional[UserId],
        anonymous_only: bool,
    ) -> List[Entry]:
        term = q.lower() if q else None
        return [
            e
            for e in self.db.entries.values()
            if e.status == EntryStatus.ACTIVE
            and (term is None or term in e.content.lower())
            and (not anonymous_only or e.author_user_id is None)
            and (author_user_id is None or e.author_user_id == author_user_id)
        ]
