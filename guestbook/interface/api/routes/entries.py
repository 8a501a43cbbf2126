"""Entry routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status
from pydantic import BaseModel

from guestbook.application.usecase.entry import (
    CreateEntryRequest,
    CreateEntryResponse,
    CreateEntryUseCase,
    DeleteEntryRequest,
    DeleteEntryResponse,
    DeleteEntryUseCase,
    GetEntryRequest,
    GetEntryResponse,
    GetEntryUseCase,
    ListEntriesRequest,
    ListEntriesResponse,
    ListEntriesUseCase,
    RestoreEntryRequest,
    RestoreEntryResponse,
    RestoreEntryUseCase,
)
from guestbook.domain.service import IdentityService
from guestbook.domain.value import ContentType, StatusFilter
from guestbook.interface.api.credentials import Credentials

router = APIRouter(prefix="/entries", tags=["entries"], route_class=DishkaRoute)


class CreateEntryAPIRequest(BaseModel):
    """API request for creating an entry.

    Length and link limits are enforced by the domain so that every
    rejection carries the same error shape.
    """

    content: str
    content_type: ContentType = ContentType.PLAIN
    parent_id: Optional[UUID] = None
    author_name: Optional[str] = None


@router.get("", response_model=ListEntriesResponse)
async def list_entries(
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    list_entries_use_case: FromDishka[ListEntriesUseCase],
    parent_id: Optional[UUID] = None,
    status_filter: StatusFilter = Query(default=StatusFilter.ACTIVE, alias="status"),
    search: Optional[str] = None,
    page: int = 1,
    page_size: Optional[int] = None,
    with_counts: bool = False,
) -> ListEntriesResponse:
    """List root entries, or the direct replies of ``parent_id``.

    Identity is optional; it only personalises ``mine`` and reaction stats.
    """
    viewer = identity_service.resolve(credentials.token, credentials.visitor_key)
    return await list_entries_use_case.execute(
        ListEntriesRequest(
            viewer=viewer,
            parent_id=parent_id,
            status=status_filter,
            search=search,
            page=page,
            page_size=page_size,
            with_counts=with_counts,
        )
    )


@router.post(
    "",
    response_model=CreateEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_entry(
    request: CreateEntryAPIRequest,
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    create_entry_use_case: FromDishka[CreateEntryUseCase],
) -> CreateEntryResponse:
    """Post a root entry or a reply.

    Requires a session token or a visitor key.
    """
    identity = identity_service.require(
        credentials.token, credentials.visitor_key, "post entries"
    )
    return await create_entry_use_case.execute(
        CreateEntryRequest(
            identity=identity,
            content=request.content,
            content_type=request.content_type,
            parent_id=request.parent_id,
            author_name=request.author_name,
            origin=credentials.origin,
        )
    )


@router.get("/{entry_id}", response_model=GetEntryResponse)
async def get_entry(
    entry_id: UUID,
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    get_entry_use_case: FromDishka[GetEntryUseCase],
    include_comments: bool = True,
) -> GetEntryResponse:
    """Get an entry and, by default, its whole reply subtree."""
    viewer = identity_service.resolve(credentials.token, credentials.visitor_key)
    return await get_entry_use_case.execute(
        GetEntryRequest(
            viewer=viewer, entry_id=entry_id, include_comments=include_comments
        )
    )


@router.delete("/{entry_id}", response_model=DeleteEntryResponse)
async def delete_entry(
    entry_id: UUID,
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    delete_entry_use_case: FromDishka[DeleteEntryUseCase],
) -> DeleteEntryResponse:
    """Soft delete an entry. Only its author or an admin may delete it."""
    identity = identity_service.require(
        credentials.token, credentials.visitor_key, "delete entries"
    )
    return await delete_entry_use_case.execute(
        DeleteEntryRequest(identity=identity, entry_id=entry_id)
    )


@router.post("/{entry_id}/restore", response_model=RestoreEntryResponse)
async def restore_entry(
    entry_id: UUID,
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    restore_entry_use_case: FromDishka[RestoreEntryUseCase],
) -> RestoreEntryResponse:
    """Un-hide a deleted entry (admin only)."""
    identity = identity_service.require(
        credentials.token, credentials.visitor_key, "restore entries"
    )
    return await restore_entry_use_case.execute(
        RestoreEntryRequest(identity=identity, entry_id=entry_id)
    )
