"""Create entry use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from guestbook.domain.service import EntryService, RateLimitService, ReactionService
from guestbook.domain.value import ContentType, EntryId, Identity

from .view import EntryView, build_entry_views


class CreateEntryRequest(BaseModel):
    """Create entry request."""

    identity: Identity
    content: str
    content_type: ContentType = ContentType.PLAIN
    parent_id: Optional[UUID] = None
    author_name: Optional[str] = None
    origin: Optional[str] = None  # Client address, for the per-origin window


class CreateEntryResponse(BaseModel):
    """Create entry response."""

    entry: EntryView


class CreateEntryUseCase:
    """Use case for posting a root entry or a reply."""

    def __init__(
        self,
        entry_service: EntryService,
        rate_limit_service: RateLimitService,
        reaction_service: ReactionService,
    ) -> None:
        """Initialize create entry use case.

        Args:
            entry_service: Entry domain service
            rate_limit_service: Rate limit domain service
            reaction_service: Reaction domain service (for the returned view)
        """
        self.entry_service = entry_service
        self.rate_limit_service = rate_limit_service
        self.reaction_service = reaction_service

    async def execute(self, request: CreateEntryRequest) -> CreateEntryResponse:
        """Execute create entry flow.

        Steps:
        1. Check the identity and origin rate windows
        2. Create the entry (validates content and parent)

        Raises:
            TooManyRequestsError: If a rate window is full
            ValidationError: If content is invalid
            NotFoundError: If the parent does not exist
            InvalidStateError: If the parent is deleted
        """
        await self.rate_limit_service.check(request.identity, request.origin)

        entry = await self.entry_service.create_entry(
            identity=request.identity,
            content=request.content,
            content_type=request.content_type,
            parent_id=EntryId(request.parent_id) if request.parent_id else None,
            author_name=request.author_name,
            origin=request.origin,
        )

        views = await build_entry_views(
            [entry], request.identity, self.entry_service, self.reaction_service
        )
        return CreateEntryResponse(entry=views[0])
