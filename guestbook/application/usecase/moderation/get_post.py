"""Get moderation post use case."""

from typing import Optional

from pydantic import BaseModel

from guestbook.application.usecase.base import BaseUseCase
from guestbook.domain.service import ModerationService
from guestbook.domain.value import GlobalPostId, Identity

from .view import ModerationPostView


class GetPostRequest(BaseModel):
    """Get moderation post request."""

    identity: Optional[Identity] = None
    global_id: str


class GetPostUseCase(BaseUseCase[GetPostRequest, ModerationPostView]):
    """Use case for the admin post detail view."""

    def __init__(self, moderation_service: ModerationService) -> None:
        self.moderation_service = moderation_service

    async def execute(self, request: GetPostRequest) -> ModerationPostView:
        """Resolve a post by global id.

        Raises:
            ValidationError: If the global id is malformed
            ForbiddenError: If the caller is not admin
            NotFoundError: If the post does not exist
        """
        post = await self.moderation_service.get_post(
            request.identity, GlobalPostId.parse(request.global_id)
        )
        return ModerationPostView.from_post(post)
