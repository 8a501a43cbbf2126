"""Get reactions use case."""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from guestbook.application.usecase.entry.view import ReactionStatsView
from guestbook.domain.service import ReactionService
from guestbook.domain.value import EntryId, Identity


class GetReactionsRequest(BaseModel):
    """Get reactions request."""

    viewer: Optional[Identity] = None
    entry_ids: List[UUID]


class GetReactionsResponse(BaseModel):
    """Stats keyed by entry id."""

    stats: dict[str, ReactionStatsView]


class GetReactionsUseCase:
    """Use case for batch reaction stats."""

    def __init__(self, reaction_service: ReactionService) -> None:
        self.reaction_service = reaction_service

    async def execute(self, request: GetReactionsRequest) -> GetReactionsResponse:
        entry_ids = [EntryId(eid) for eid in dict.fromkeys(request.entry_ids)]
        stats = await self.reaction_service.get_aggregate(entry_ids, request.viewer)
        return GetReactionsResponse(
            stats={
                str(eid): ReactionStatsView.from_stats(stats.get(eid))
                for eid in entry_ids
            }
        )
