"""Clear reaction use case."""

from uuid import UUID

from pydantic import BaseModel

from guestbook.application.usecase.entry.view import ReactionStatsView
from guestbook.domain.service import ReactionService
from guestbook.domain.value import EntryId, Identity


class ClearReactionRequest(BaseModel):
    """Clear reaction request."""

    identity: Identity
    entry_id: UUID


class ClearReactionResponse(BaseModel):
    """Clear reaction response."""

    entry_id: str
    removed: bool
    stats: ReactionStatsView


class ClearReactionUseCase:
    """Use case for removing the caller's reaction (no-op when absent)."""

    def __init__(self, reaction_service: ReactionService) -> None:
        self.reaction_service = reaction_service

    async def execute(self, request: ClearReactionRequest) -> ClearReactionResponse:
        entry_id = EntryId(request.entry_id)
        removed = await self.reaction_service.clear_reaction(request.identity, entry_id)
        stats = await self.reaction_service.get_aggregate([entry_id], request.identity)
        return ClearReactionResponse(
            entry_id=str(entry_id),
            removed=removed,
            stats=ReactionStatsView.from_stats(stats.get(entry_id)),
        )
