"""In-memory reaction repository for testing."""

from typing import List, Sequence

from guestbook.domain.model import Reaction
from guestbook.domain.repository import ReactionRepository
from guestbook.domain.value import EntryId

from .database import InMemoryDatabase


class InMemoryReactionRepository(ReactionRepository):
    """In-memory implementation of ReactionRepository for testing."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self.db = db

    async def upsert(self, reaction: Reaction) -> Reaction:
        """Insert or replace a reaction."""
        key = (reaction.entry_id, reaction.identity_key)
        existing = self.db.reactions.get(key)
        if existing is not None:
            reaction = existing.model_copy(
                update={"value": reaction.value, "updated_at": reaction.updated_at}
            )
        self.db.reactions[key] = reaction
        return reaction

    async def delete(self, entry_id: EntryId, identity_key: str) -> bool:
        """Delete the reaction for a key."""
        return self.db.reactions.pop((entry_id, identity_key), None) is not None

    async def find_by_entries(self, entry_ids: Sequence[EntryId]) -> List[Reaction]:
        """Find all reactions on the given entries."""
        wanted = set(entry_ids)
        return [r for r in self.db.reactions.values() if r.entry_id in wanted]
