"""List moderation posts use case."""

from typing import List, Optional

from pydantic import BaseModel

from guestbook.application.usecase.base import BaseUseCase
from guestbook.domain.service import ModerationService
from guestbook.domain.value import Identity, PostSource

from .view import ModerationPostView


class ListPostsRequest(BaseModel):
    """List moderation posts request."""

    identity: Optional[Identity] = None
    q: Optional[str] = None
    user: Optional[str] = None  # User id or "anonymous"
    source: Optional[PostSource] = None
    page: int = 1
    page_size: Optional[int] = None


class ListPostsResponse(BaseModel):
    """List moderation posts response."""

    posts: List[ModerationPostView]
    total: int
    page: int
    page_size: int


class ListPostsUseCase(BaseUseCase[ListPostsRequest, ListPostsResponse]):
    """Use case for the unified admin post listing."""

    def __init__(self, moderation_service: ModerationService) -> None:
        self.moderation_service = moderation_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """List posts from all sources.

        Raises:
            ForbiddenError: If the caller is not admin
        """
        result = await self.moderation_service.list_unified_posts(
            identity=request.identity,
            q=request.q,
            user=request.user,
            source=request.source,
            page=request.page,
            page_size=request.page_size,
        )
        return ListPostsResponse(
            posts=[ModerationPostView.from_post(p) for p in result.posts],
            total=result.total,
            page=result.page,
            page_size=result.page_size,
        )
