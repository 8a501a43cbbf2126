"""List author groups use case."""

from typing import List, Optional

from pydantic import BaseModel

from guestbook.application.usecase.base import BaseUseCase
from guestbook.domain.service import ModerationService
from guestbook.domain.value import Identity


class ListAuthorsRequest(BaseModel):
    """List author groups request."""

    identity: Optional[Identity] = None
    page: int = 1
    page_size: Optional[int] = None


class AuthorGroupView(BaseModel):
    group_key: str
    name: Optional[str]
    active_count: int
    deleted_count: int
    reaction_count: int


class ListAuthorsResponse(BaseModel):
    authors: List[AuthorGroupView]


class ListAuthorsUseCase(BaseUseCase[ListAuthorsRequest, ListAuthorsResponse]):
    """Use case for per-identity activity counts."""

    def __init__(self, moderation_service: ModerationService) -> None:
        self.moderation_service = moderation_service

    async def execute(self, request: ListAuthorsRequest) -> ListAuthorsResponse:
        groups = await self.moderation_service.list_author_groups(
            request.identity, page=request.page, page_size=request.page_size
        )
        return ListAuthorsResponse(
            authors=[
                AuthorGroupView(
                    group_key=g.group_key,
                    name=g.name,
                    active_count=g.active_count,
                    deleted_count=g.deleted_count,
                    reaction_count=g.reaction_count,
                )
                for g in groups
            ]
        )
