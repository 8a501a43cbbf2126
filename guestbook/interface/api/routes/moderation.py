"""Admin moderation routes.

All routes require an administrator identity; authorization is enforced
by the moderation service.
"""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from guestbook.application.usecase.moderation import (
    GetPostRequest,
    GetPostUseCase,
    ListAuthorsRequest,
    ListAuthorsResponse,
    ListAuthorsUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    ModerationPostView,
    SetPostDeletedRequest,
    SetPostDeletedUseCase,
)
from guestbook.domain.service import IdentityService
from guestbook.domain.value import PostSource
from guestbook.interface.api.credentials import Credentials

router = APIRouter(prefix="/admin", tags=["moderation"], route_class=DishkaRoute)


class SetPostDeletedAPIRequest(BaseModel):
    """Toggle request. ``id`` is ``source:uuid`` or a bare entry id."""

    id: str
    deleted: bool


@router.get("/posts", response_model=ListPostsResponse)
async def list_posts(
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    list_posts_use_case: FromDishka[ListPostsUseCase],
    q: Optional[str] = None,
    user: Optional[str] = None,
    source: Optional[PostSource] = None,
    page: int = 1,
    page_size: Optional[int] = None,
) -> ListPostsResponse:
    """Unified listing of entries and chat messages, newest first."""
    identity = identity_service.resolve(credentials.token, credentials.visitor_key)
    return await list_posts_use_case.execute(
        ListPostsRequest(
            identity=identity,
            q=q,
            user=user,
            source=source,
            page=page,
            page_size=page_size,
        )
    )


@router.get("/posts/{global_id}", response_model=ModerationPostView)
async def get_post(
    global_id: str,
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    get_post_use_case: FromDishka[GetPostUseCase],
) -> ModerationPostView:
    """Post detail, resolved regardless of deletion."""
    identity = identity_service.resolve(credentials.token, credentials.visitor_key)
    return await get_post_use_case.execute(
        GetPostRequest(identity=identity, global_id=global_id)
    )


@router.patch("/posts", response_model=ModerationPostView)
async def set_post_deleted(
    request: SetPostDeletedAPIRequest,
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    set_post_deleted_use_case: FromDishka[SetPostDeletedUseCase],
) -> ModerationPostView:
    """Hide or unhide a post from any source."""
    identity = identity_service.resolve(credentials.token, credentials.visitor_key)
    return await set_post_deleted_use_case.execute(
        SetPostDeletedRequest(
            identity=identity, id=request.id, deleted=request.deleted
        )
    )


@router.get("/authors", response_model=ListAuthorsResponse)
async def list_authors(
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    list_authors_use_case: FromDishka[ListAuthorsUseCase],
    page: int = 1,
    page_size: Optional[int] = None,
) -> ListAuthorsResponse:
    """Per-identity post and reaction counts."""
    identity = identity_service.resolve(credentials.token, credentials.visitor_key)
    return await list_authors_use_case.execute(
        ListAuthorsRequest(identity=identity, page=page, page_size=page_size)
    )
