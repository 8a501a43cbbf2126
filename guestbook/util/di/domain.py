"""Domain layer DI providers."""

from dishka import Scope, provide

from guestbook.config import (
    AuthSettings,
    GuestbookSettings,
    ModerationSettings,
    RateLimitSettings,
)
from guestbook.domain.repository import (
    AuthorGroupRepository,
    ChatMessageRepository,
    EntryRepository,
    ReactionRepository,
    TombstoneRepository,
    UserProfileRepository,
)
from guestbook.domain.service import (
    ContentPolicy,
    EntryService,
    IdentityService,
    JWTService,
    ModerationService,
    RateLimitService,
    ReactionService,
)
from guestbook.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_identity_service(
        self, jwt_service: JWTService, auth_settings: AuthSettings
    ) -> IdentityService:
        """Provide identity resolution service."""
        return IdentityService(jwt_service=jwt_service, auth_settings=auth_settings)

    @provide
    def get_content_policy(self, settings: GuestbookSettings) -> ContentPolicy:
        """Provide content validation rules."""
        return ContentPolicy(settings=settings)

    @provide
    def get_entry_service(
        self,
        entry_repository: EntryRepository,
        user_profile_repository: UserProfileRepository,
        content_policy: ContentPolicy,
        settings: GuestbookSettings,
    ) -> EntryService:
        """Provide entry domain service."""
        return EntryService(
            entry_repository=entry_repository,
            user_profile_repository=user_profile_repository,
            content_policy=content_policy,
            settings=settings,
        )

    @provide
    def get_reaction_service(
        self,
        reaction_repository: ReactionRepository,
        entry_repository: EntryRepository,
    ) -> ReactionService:
        """Provide reaction domain service."""
        return ReactionService(
            reaction_repository=reaction_repository,
            entry_repository=entry_repository,
        )

    @provide
    def get_rate_limit_service(
        self, entry_repository: EntryRepository, settings: RateLimitSettings
    ) -> RateLimitService:
        """Provide rate limit domain service."""
        return RateLimitService(entry_repository=entry_repository, settings=settings)

    @provide
    def get_moderation_service(
        self,
        entry_repository: EntryRepository,
        chat_message_repository: ChatMessageRepository,
        tombstone_repository: TombstoneRepository,
        user_profile_repository: UserProfileRepository,
        author_group_repository: AuthorGroupRepository,
        entry_service: EntryService,
        settings: ModerationSettings,
    ) -> ModerationService:
        """Provide moderation overlay service."""
        return ModerationService(
            entry_repository=entry_repository,
            chat_message_repository=chat_message_repository,
            tombstone_repository=tombstone_repository,
            user_profile_repository=user_profile_repository,
            author_group_repository=author_group_repository,
            entry_service=entry_service,
            settings=settings,
        )
