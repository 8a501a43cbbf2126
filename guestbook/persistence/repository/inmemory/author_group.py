"""In-memory author summary repository for testing."""

from typing import List

from guestbook.domain.model import AuthorPostGroup
from guestbook.domain.repository import AuthorGroupRepository
from guestbook.domain.value import EntryStatus

from .database import InMemoryDatabase


class InMemoryAuthorGroupRepository(AuthorGroupRepository):
    """Computes the summary view from the in-memory entries and reactions."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self.db = db

    async def find_all(self, limit: int = 100, offset: int = 0) -> List[AuthorPostGroup]:
        counts: dict[str, dict[str, int]] = {}

        def bucket(key: str) -> dict[str, int]:
            return counts.setdefault(key, {"active": 0, "deleted": 0, "reactions": 0})

        for entry in self.db.entries.values():
            key = str(entry.author_user_id) if entry.author_user_id else entry.author_key
            if key is None:
                continue
            field = "active" if entry.status == EntryStatus.ACTIVE else "deleted"
            bucket(key)[field] += 1

        for reaction in self.db.reactions.values():
            bucket(reaction.identity_key)["reactions"] += 1

        groups = [
            AuthorPostGroup(
                group_key=key,
                active_count=c["active"],
                deleted_count=c["deleted"],
                reaction_count=c["reactions"],
            )
            for key, c in counts.items()
        ]
        groups.sort(key=lambda g: (-(g.active_count + g.deleted_count), g.group_key))
        return groups[offset : offset + limit]
