"""Sliding-window rate limiting for entry creation."""

from datetime import timedelta
from typing import Optional

import logfire

from guestbook.config import RateLimitSettings
from guestbook.domain.error import TooManyRequestsError
from guestbook.domain.model.common import utcnow
from guestbook.domain.repository import EntryRepository
from guestbook.domain.value import Identity

from .base import Service


class RateLimitService(Service):
    """Counts recent entries per identity and per origin.

    Windows are derived from stored ``created_at`` timestamps on every
    call. The check and the insert that follows are not atomic, so a burst
    of concurrent requests may overshoot the limit slightly.
    """

    def __init__(
        self, entry_repository: EntryRepository, settings: RateLimitSettings
    ) -> None:
        self.entry_repository = entry_repository
        self.settings = settings

    async def check(self, identity: Identity, origin: Optional[str] = None) -> None:
        """Reject the caller if either window is already full.

        Args:
            identity: Acting identity
            origin: Network origin of the request, if known

        Raises:
            TooManyRequestsError: If the identity or origin reached the limit
        """
        with logfire.span(
            "rate_limit_service.check", identity_key=identity.key, origin=origin
        ):
            since = utcnow() - timedelta(seconds=self.settings.window_seconds)

            # Entries posted under the visitor key before sign-in still count
            by_identity = await self.entry_repository.count_created_since(
                since,
                author_user_id=identity.user_id,
                author_keys=[identity.visitor_key.root] if identity.visitor_key else [],
            )
            if by_identity >= self.settings.max_entries:
                logfire.warn(
                    "Rate limit hit", scope="identity", identity_key=identity.key
                )
                raise TooManyRequestsError(
                    "identity", self.settings.max_entries, self.settings.window_seconds
                )

            if origin:
                by_origin = await self.entry_repository.count_created_since(
                    since, origin=origin
                )
                if by_origin >= self.settings.max_entries:
                    logfire.warn("Rate limit hit", scope="origin", origin=origin)
                    raise TooManyRequestsError(
                        "origin",
                        self.settings.max_entries,
                        self.settings.window_seconds,
                    )
