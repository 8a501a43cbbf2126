"""Get viewer use case."""

from typing import Optional

from pydantic import BaseModel

from guestbook.domain.service import IdentityService, ViewerSummary
from guestbook.domain.value import Identity


class GetViewerRequest(BaseModel):
    viewer: Optional[Identity] = None


class GetViewerUseCase:
    """Use case reporting whether the caller is signed in and an admin."""

    def __init__(self, identity_service: IdentityService) -> None:
        self.identity_service = identity_service

    async def execute(self, request: GetViewerRequest) -> ViewerSummary:
        return self.identity_service.get_viewer_summary(request.viewer)
