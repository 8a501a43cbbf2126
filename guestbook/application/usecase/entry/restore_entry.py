"""Restore entry use case."""

from uuid import UUID

from pydantic import BaseModel

from guestbook.domain.service import EntryService
from guestbook.domain.value import EntryId, EntryStatus, Identity


class RestoreEntryRequest(BaseModel):
    """Restore entry request."""

    identity: Identity
    entry_id: UUID


class RestoreEntryResponse(BaseModel):
    """Restore entry response.

    ``content_retained`` is False when the delete policy blanked the content.
    """

    entry_id: str
    status: EntryStatus
    content_retained: bool


class RestoreEntryUseCase:
    """Use case for an administrator un-hiding a deleted entry."""

    def __init__(self, entry_service: EntryService) -> None:
        self.entry_service = entry_service

    async def execute(self, request: RestoreEntryRequest) -> RestoreEntryResponse:
        entry = await self.entry_service.restore(
            request.identity, EntryId(request.entry_id)
        )
        return RestoreEntryResponse(
            entry_id=str(entry.id),
            status=entry.status,
            content_retained=bool(entry.content),
        )
