"""Set post deleted use case."""

from typing import Optional

from pydantic import BaseModel

from guestbook.application.usecase.base import BaseUseCase
from guestbook.domain.service import ModerationService
from guestbook.domain.value import GlobalPostId, Identity

from .view import ModerationPostView


class SetPostDeletedRequest(BaseModel):
    """Toggle request; ``id`` may be a global id or a bare entry id."""

    identity: Optional[Identity] = None
    id: str
    deleted: bool


class SetPostDeletedUseCase(BaseUseCase[SetPostDeletedRequest, ModerationPostView]):
    """Use case for hiding or unhiding any post from the admin view."""

    def __init__(self, moderation_service: ModerationService) -> None:
        self.moderation_service = moderation_service

    async def execute(self, request: SetPostDeletedRequest) -> ModerationPostView:
        post = await self.moderation_service.set_deleted(
            request.identity, GlobalPostId.parse(request.id), request.deleted
        )
        return ModerationPostView.from_post(post)
