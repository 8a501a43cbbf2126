"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from guestbook.config import (
    AuthSettings,
    GuestbookSettings,
    ModerationSettings,
    RateLimitSettings,
    Settings,
)
from guestbook.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Config provider.

    Settings are loaded from environment variables and .env file once per
    container; nested sections are exposed so services depend only on
    their own slice.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_guestbook_settings(self, settings: Settings) -> GuestbookSettings:
        return settings.guestbook

    @provide
    def provide_rate_limit_settings(self, settings: Settings) -> RateLimitSettings:
        return settings.rate_limit

    @provide
    def provide_moderation_settings(self, settings: Settings) -> ModerationSettings:
        return settings.moderation
