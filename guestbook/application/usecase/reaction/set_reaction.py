"""Set reaction use case."""

from typing import Union
from uuid import UUID

from pydantic import BaseModel

from guestbook.application.usecase.entry.view import ReactionStatsView
from guestbook.domain.service import ReactionService
from guestbook.domain.value import EntryId, Identity, ReactionValue


class SetReactionRequest(BaseModel):
    """Set reaction request.

    ``value`` accepts "like", "dislike", 1, -1, or 0 to clear.
    """

    identity: Identity
    entry_id: UUID
    value: Union[int, str]


class SetReactionResponse(BaseModel):
    """Entry stats after the change."""

    entry_id: str
    stats: ReactionStatsView


class SetReactionUseCase:
    """Use case for liking, disliking or clearing a reaction."""

    def __init__(self, reaction_service: ReactionService) -> None:
        """Initialize set reaction use case.

        Args:
            reaction_service: Reaction domain service
        """
        self.reaction_service = reaction_service

    async def execute(self, request: SetReactionRequest) -> SetReactionResponse:
        """Execute set reaction flow.

        Raises:
            ValidationError: If the value is not recognised
            NotFoundError: If the entry does not exist
            InvalidStateError: If the entry is deleted
        """
        entry_id = EntryId(request.entry_id)
        value = ReactionValue.parse(request.value)

        if value is None:
            await self.reaction_service.clear_reaction(request.identity, entry_id)
        else:
            await self.reaction_service.set_reaction(request.identity, entry_id, value)

        stats = await self.reaction_service.get_aggregate([entry_id], request.identity)
        return SetReactionResponse(
            entry_id=str(entry_id),
            stats=ReactionStatsView.from_stats(stats.get(entry_id)),
        )
