"""Reaction repository interface."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from guestbook.domain.model.reaction import Reaction
from guestbook.domain.value import EntryId


class ReactionRepository(ABC):
    """Repository for Reaction entity.

    Rows are keyed by ``(entry_id, identity_key)``.
    """

    @abstractmethod
    async def upsert(self, reaction: Reaction) -> Reaction:
        """Insert a reaction or replace the value of the existing one.

        Must be a single atomic statement so that concurrent set calls
        for the same key never produce two rows.

        Args:
            reaction: The reaction to store

        Returns:
            The stored reaction
        """
        pass

    @abstractmethod
    async def delete(self, entry_id: EntryId, identity_key: str) -> bool:
        """Delete the reaction for a key.

        Returns:
            True if a reaction was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def find_by_entries(self, entry_ids: Sequence[EntryId]) -> List[Reaction]:
        """Find all reactions on the given entries (batch query)."""
        pass
