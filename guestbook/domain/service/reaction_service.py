"""Reaction domain service."""

from typing import Optional, Sequence

import logfire

from guestbook.domain.error import InvalidStateError, NotFoundError
from guestbook.domain.model import Reaction, ReactionStats
from guestbook.domain.model.common import utcnow
from guestbook.domain.repository import EntryRepository, ReactionRepository
from guestbook.domain.value import EntryId, Identity, ReactionValue

from .base import Service


class ReactionService(Service):
    """Domain service for the reaction ledger."""

    def __init__(
        self,
        reaction_repository: ReactionRepository,
        entry_repository: EntryRepository,
    ) -> None:
        """Initialize reaction service.

        Args:
            reaction_repository: Reaction repository
            entry_repository: Entry repository (existence and status checks)
        """
        self.reaction_repository = reaction_repository
        self.entry_repository = entry_repository

    async def set_reaction(
        self, identity: Identity, entry_id: EntryId, value: ReactionValue
    ) -> Reaction:
        """Set the caller's reaction on an entry, replacing any previous one.

        Args:
            identity: Reacting identity
            entry_id: Target entry
            value: Like or dislike

        Returns:
            The stored reaction

        Raises:
            NotFoundError: If the entry does not exist
            InvalidStateError: If the entry is deleted
        """
        with logfire.span(
            "reaction_service.set_reaction",
            entry_id=str(entry_id),
            identity_key=identity.key,
            value=int(value),
        ):
            entry = await self.entry_repository.find_by_id(entry_id)
            if entry is None:
                raise NotFoundError("Entry", str(entry_id))
            if entry.is_deleted:
                logfire.warn("Reaction on deleted entry", entry_id=str(entry_id))
                raise InvalidStateError("Cannot react to a deleted entry")

            # Rows written under the caller's other keys (e.g. before sign-in)
            # are folded into the acting key
            for key in identity.keys:
                if key != identity.key:
                    await self.reaction_repository.delete(entry_id, key)

            now = utcnow()
            reaction = await self.reaction_repository.upsert(
                Reaction(
                    entry_id=entry_id,
                    identity_key=identity.key,
                    value=value,
                    created_at=now,
                    updated_at=now,
                )
            )
            logfire.info("Reaction set", entry_id=str(entry_id), value=int(value))
            return reaction

    async def clear_reaction(self, identity: Identity, entry_id: EntryId) -> bool:
        """Remove the caller's reaction under any of its keys.

        No-op when there is none.

        Returns:
            True if a reaction was removed
        """
        with logfire.span(
            "reaction_service.clear_reaction",
            entry_id=str(entry_id),
            identity_key=identity.key,
        ):
            removed = False
            for key in identity.keys:
                if await self.reaction_repository.delete(entry_id, key):
                    removed = True
            logfire.info("Reaction cleared", entry_id=str(entry_id), removed=removed)
            return removed

    async def get_aggregate(
        self,
        entry_ids: Sequence[EntryId],
        viewer: Optional[Identity] = None,
    ) -> dict[EntryId, ReactionStats]:
        """Aggregate like/dislike counts for a set of entries.

        All reactions of the set are read in one query. The viewer's own
        reaction is looked up under each of its keys in precedence order.

        Args:
            entry_ids: Entries to aggregate
            viewer: Optional viewer for ``my_reaction``

        Returns:
            Stats for every requested id (zeros when no reactions exist)
        """
        if not entry_ids:
            return {}

        reactions = await self.reaction_repository.find_by_entries(entry_ids)

        likes: dict[EntryId, int] = {eid: 0 for eid in entry_ids}
        dislikes: dict[EntryId, int] = {eid: 0 for eid in entry_ids}
        by_key: dict[EntryId, dict[str, int]] = {eid: {} for eid in entry_ids}

        for r in reactions:
            if r.entry_id not in likes:
                continue
            if r.value == ReactionValue.LIKE:
                likes[r.entry_id] += 1
            elif r.value == ReactionValue.DISLIKE:
                dislikes[r.entry_id] += 1
            by_key[r.entry_id][r.identity_key] = int(r.value)

        viewer_keys = viewer.keys if viewer else []
        stats: dict[EntryId, ReactionStats] = {}
        for eid in entry_ids:
            mine = next(
                (by_key[eid][k] for k in viewer_keys if k in by_key[eid]), 0
            )
            stats[eid] = ReactionStats(
                like=likes[eid], dislike=dislikes[eid], my_reaction=mine
            )
        return stats
