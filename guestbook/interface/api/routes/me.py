"""Viewer routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query

from guestbook.application.usecase.entry import (
    ListMyEntriesRequest,
    ListMyEntriesResponse,
    ListMyEntriesUseCase,
)
from guestbook.application.usecase.identity import GetViewerRequest, GetViewerUseCase
from guestbook.domain.service import IdentityService, ViewerSummary
from guestbook.interface.api.credentials import Credentials

router = APIRouter(prefix="/me", tags=["me"], route_class=DishkaRoute)


@router.get("", response_model=ViewerSummary)
async def get_me(
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    get_viewer_use_case: FromDishka[GetViewerUseCase],
) -> ViewerSummary:
    """Report whether the caller is signed in, and whether as admin."""
    viewer = identity_service.resolve(credentials.token, credentials.visitor_key)
    return await get_viewer_use_case.execute(GetViewerRequest(viewer=viewer))


@router.get("/entries", response_model=ListMyEntriesResponse)
async def list_my_entries(
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    list_my_entries_use_case: FromDishka[ListMyEntriesUseCase],
    limit: int = Query(default=30, ge=1, le=100),
) -> ListMyEntriesResponse:
    """List the signed-in caller's own entries, deleted ones included.

    Requires authentication.
    """
    identity = identity_service.require(
        credentials.token, credentials.visitor_key, "list own entries"
    )
    return await list_my_entries_use_case.execute(
        ListMyEntriesRequest(identity=identity, limit=limit)
    )
