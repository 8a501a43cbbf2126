"""List my entries use case."""

from typing import List

from pydantic import BaseModel

from guestbook.domain.service import EntryService, ReactionService
from guestbook.domain.value import Identity

from .view import EntryView, build_entry_views


class ListMyEntriesRequest(BaseModel):
    """List my entries request."""

    identity: Identity
    limit: int = 30


class ListMyEntriesResponse(BaseModel):
    """The caller's own entries, newest first, deleted ones included."""

    entries: List[EntryView]


class ListMyEntriesUseCase:
    """Use case backing the "my posts" page."""

    def __init__(
        self, entry_service: EntryService, reaction_service: ReactionService
    ) -> None:
        self.entry_service = entry_service
        self.reaction_service = reaction_service

    async def execute(self, request: ListMyEntriesRequest) -> ListMyEntriesResponse:
        limit = max(1, min(request.limit, 100))
        entries = await self.entry_service.list_by_author(request.identity, limit)
        views = await build_entry_views(
            entries, request.identity, self.entry_service, self.reaction_service
        )
        return ListMyEntriesResponse(entries=views)
