"""List entries use case."""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from guestbook.domain.service import EntryService, ReactionService
from guestbook.domain.value import EntryId, EntryStatus, Identity, StatusFilter

from .view import EntryView, build_entry_views


class ListEntriesRequest(BaseModel):
    """List entries request."""

    viewer: Optional[Identity] = None
    parent_id: Optional[UUID] = None
    status: StatusFilter = StatusFilter.ACTIVE
    search: Optional[str] = None
    page: int = 1
    page_size: Optional[int] = None
    with_counts: bool = False


class RootCounts(BaseModel):
    """Root entry counts per status."""

    active: int
    deleted: int


class ListEntriesResponse(BaseModel):
    """List entries response."""

    entries: List[EntryView]
    total: int
    page: int
    page_size: int
    counts: Optional[RootCounts] = None


class ListEntriesUseCase:
    """Use case for listing roots or the direct replies of an entry."""

    def __init__(
        self, entry_service: EntryService, reaction_service: ReactionService
    ) -> None:
        self.entry_service = entry_service
        self.reaction_service = reaction_service

    async def execute(self, request: ListEntriesRequest) -> ListEntriesResponse:
        """List one page of entries, personalised for the viewer."""
        result = await self.entry_service.list_entries(
            parent_id=EntryId(request.parent_id) if request.parent_id else None,
            status=request.status,
            search=request.search,
            page=request.page,
            page_size=request.page_size,
            with_counts=request.with_counts,
        )

        entries = await build_entry_views(
            result.entries,
            request.viewer,
            self.entry_service,
            self.reaction_service,
            # Reply listings carry no comment counts
            child_counts=result.child_counts if request.parent_id is None else None,
        )

        counts = None
        if result.root_counts is not None:
            counts = RootCounts(
                active=result.root_counts.get(EntryStatus.ACTIVE, 0),
                deleted=result.root_counts.get(EntryStatus.DELETED, 0),
            )

        return ListEntriesResponse(
            entries=entries,
            total=result.total,
            page=result.page,
            page_size=result.page_size,
            counts=counts,
        )
