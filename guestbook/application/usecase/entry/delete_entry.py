"""Delete entry use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from guestbook.domain.service import EntryService
from guestbook.domain.value import EntryId, Identity


class DeleteEntryRequest(BaseModel):
    """Delete entry request."""

    identity: Identity
    entry_id: UUID


class DeleteEntryResponse(BaseModel):
    """Delete entry response."""

    entry_id: str
    deleted: bool
    deleted_at: Optional[datetime]


class DeleteEntryUseCase:
    """Use case for soft deleting an entry (owner or admin, idempotent)."""

    def __init__(self, entry_service: EntryService) -> None:
        self.entry_service = entry_service

    async def execute(self, request: DeleteEntryRequest) -> DeleteEntryResponse:
        entry = await self.entry_service.soft_delete(
            request.identity, EntryId(request.entry_id)
        )
        return DeleteEntryResponse(
            entry_id=str(entry.id),
            deleted=entry.is_deleted,
            deleted_at=entry.deleted_at,
        )
