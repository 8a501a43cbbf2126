"""Get entry use case."""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from guestbook.domain.service import EntryService, ReactionService
from guestbook.domain.value import EntryId, Identity

from .view import EntryView, build_entry_views


class GetEntryRequest(BaseModel):
    """Get entry request."""

    viewer: Optional[Identity] = None
    entry_id: UUID
    include_comments: bool = True


class GetEntryResponse(BaseModel):
    """Entry with its full reply subtree in breadth-first order."""

    entry: EntryView
    comments: List[EntryView] = []


class GetEntryUseCase:
    """Use case for reading an entry and, optionally, everything below it."""

    def __init__(
        self, entry_service: EntryService, reaction_service: ReactionService
    ) -> None:
        self.entry_service = entry_service
        self.reaction_service = reaction_service

    async def execute(self, request: GetEntryRequest) -> GetEntryResponse:
        """Execute get entry flow.

        Raises:
            NotFoundError: If the entry does not exist
        """
        entry_id = EntryId(request.entry_id)
        entry = await self.entry_service.get_entry(entry_id)

        descendants = []
        if request.include_comments:
            descendants = await self.entry_service.load_subtree(entry_id)

        views = await build_entry_views(
            [entry, *descendants],
            request.viewer,
            self.entry_service,
            self.reaction_service,
        )
        return GetEntryResponse(entry=views[0], comments=views[1:])
