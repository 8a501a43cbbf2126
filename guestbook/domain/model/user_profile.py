"""User profile (display name lookup)."""

from typing import Optional

from guestbook.domain.model.common import DomainModel
from guestbook.domain.value import UserId


class UserProfile(DomainModel):
    """Public profile of an authenticated user.

    ``username`` is the live display name; it overrides the name
    snapshotted onto entries at post time.
    """

    user_id: UserId
    username: Optional[str] = None
    email: Optional[str] = None
