"""Application layer DI providers."""

from dishka import Scope, provide

from guestbook.application.usecase.entry import (
    CreateEntryUseCase,
    DeleteEntryUseCase,
    GetEntryUseCase,
    ListEntriesUseCase,
    ListMyEntriesUseCase,
    RestoreEntryUseCase,
)
from guestbook.application.usecase.identity import GetViewerUseCase
from guestbook.application.usecase.moderation import (
    GetPostUseCase,
    ListAuthorsUseCase,
    ListPostsUseCase,
    SetPostDeletedUseCase,
)
from guestbook.application.usecase.reaction import (
    ClearReactionUseCase,
    GetReactionsUseCase,
    SetReactionUseCase,
)
from guestbook.domain.service import (
    EntryService,
    IdentityService,
    ModerationService,
    RateLimitService,
    ReactionService,
)
from guestbook.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Identity use cases
    @provide(scope=Scope.REQUEST)
    def get_viewer_use_case(self, identity_service: IdentityService) -> GetViewerUseCase:
        """Provide get viewer use case."""
        return GetViewerUseCase(identity_service=identity_service)

    # Entry use cases
    @provide(scope=Scope.REQUEST)
    def get_create_entry_use_case(
        self,
        entry_service: EntryService,
        rate_limit_service: RateLimitService,
        reaction_service: ReactionService,
    ) -> CreateEntryUseCase:
        """Provide create entry use case."""
        return CreateEntryUseCase(
            entry_service=entry_service,
            rate_limit_service=rate_limit_service,
            reaction_service=reaction_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_entries_use_case(
        self, entry_service: EntryService, reaction_service: ReactionService
    ) -> ListEntriesUseCase:
        """Provide list entries use case."""
        return ListEntriesUseCase(
            entry_service=entry_service, reaction_service=reaction_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_entry_use_case(
        self, entry_service: EntryService, reaction_service: ReactionService
    ) -> GetEntryUseCase:
        """Provide get entry use case."""
        return GetEntryUseCase(
            entry_service=entry_service, reaction_service=reaction_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_entry_use_case(self, entry_service: EntryService) -> DeleteEntryUseCase:
        """Provide delete entry use case."""
        return DeleteEntryUseCase(entry_service=entry_service)

    @provide(scope=Scope.REQUEST)
    def get_restore_entry_use_case(
        self, entry_service: EntryService
    ) -> RestoreEntryUseCase:
        """Provide restore entry use case."""
        return RestoreEntryUseCase(entry_service=entry_service)

    @provide(scope=Scope.REQUEST)
    def get_list_my_entries_use_case(
        self, entry_service: EntryService, reaction_service: ReactionService
    ) -> ListMyEntriesUseCase:
        """Provide list my entries use case."""
        return ListMyEntriesUseCase(
            entry_service=entry_service, reaction_service=reaction_service
        )

    # Reaction use cases
    @provide(scope=Scope.REQUEST)
    def get_set_reaction_use_case(
        self, reaction_service: ReactionService
    ) -> SetReactionUseCase:
        """Provide set reaction use case."""
        return SetReactionUseCase(reaction_service=reaction_service)

    @provide(scope=Scope.REQUEST)
    def get_clear_reaction_use_case(
        self, reaction_service: ReactionService
    ) -> ClearReactionUseCase:
        """Provide clear reaction use case."""
        return ClearReactionUseCase(reaction_service=reaction_service)

    @provide(scope=Scope.REQUEST)
    def get_get_reactions_use_case(
        self, reaction_service: ReactionService
    ) -> GetReactionsUseCase:
        """Provide get reactions use case."""
        return GetReactionsUseCase(reaction_service=reaction_service)

    # Moderation use cases
    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self, moderation_service: ModerationService
    ) -> ListPostsUseCase:
        """Provide unified post listing use case."""
        return ListPostsUseCase(moderation_service=moderation_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(self, moderation_service: ModerationService) -> GetPostUseCase:
        """Provide post detail use case."""
        return GetPostUseCase(moderation_service=moderation_service)

    @provide(scope=Scope.REQUEST)
    def get_set_post_deleted_use_case(
        self, moderation_service: ModerationService
    ) -> SetPostDeletedUseCase:
        """Provide post delete toggle use case."""
        return SetPostDeletedUseCase(moderation_service=moderation_service)

    @provide(scope=Scope.REQUEST)
    def get_list_authors_use_case(
        self, moderation_service: ModerationService
    ) -> ListAuthorsUseCase:
        """Provide author summary use case."""
        return ListAuthorsUseCase(moderation_service=moderation_service)
