"""Identity resolution service."""

from uuid import UUID

import logfire
from pydantic import BaseModel, ValidationError as PydanticValidationError

from guestbook.config import AuthSettings
from guestbook.domain.error import UnauthenticatedError
from guestbook.domain.value import Identity, UserId, VisitorKey

from .base import Service
from .jwt_service import JWTService


class ViewerSummary(BaseModel):
    """What a client may know about itself."""

    is_authed: bool
    is_admin: bool
    email: str | None = None


class IdentityService(Service):
    """Resolves the caller's identity from a session token and a visitor key.

    The authenticated user id takes precedence as the acting key. A valid
    visitor key sent alongside is kept so records written before sign-in
    still count as the caller's own.
    """

    def __init__(self, jwt_service: JWTService, auth_settings: AuthSettings) -> None:
        self.jwt_service = jwt_service
        self.auth_settings = auth_settings

    def resolve(
        self, auth_token: str | None, visitor_key: str | None
    ) -> Identity | None:
        """Resolve an identity; returns None when nothing usable was presented.

        Invalid tokens and malformed visitor keys are treated as absent.
        """
        payload = self.jwt_service.get_payload_from_token(auth_token)
        key = parse_visitor_key(visitor_key)

        user_id: UserId | None = None
        if payload is not None:
            try:
                user_id = UserId(UUID(payload.user_id))
            except ValueError:
                logfire.warn("Token carries malformed user id")
                payload = None

        if user_id is None and key is None:
            return None

        email = payload.email if payload else None
        return Identity(
            user_id=user_id,
            visitor_key=key,
            email=email,
            display_name=payload.name if payload else None,
            is_admin=bool(payload and payload.email_verified and self.is_admin_email(email)),
        )

    def require(
        self, auth_token: str | None, visitor_key: str | None, action: str
    ) -> Identity:
        """Resolve an identity or fail.

        Raises:
            UnauthenticatedError: If neither variant could be resolved
        """
        identity = self.resolve(auth_token, visitor_key)
        if identity is None:
            raise UnauthenticatedError(action)
        return identity

    def is_admin_email(self, email: str | None) -> bool:
        """Compare an email with the configured administrator email."""
        admin = self.auth_settings.admin_email
        if not email or not admin:
            return False
        return email.strip().lower() == admin.strip().lower()

    def get_viewer_summary(self, identity: Identity | None) -> ViewerSummary:
        if identity is None or not identity.is_authenticated:
            return ViewerSummary(is_authed=False, is_admin=False)
        return ViewerSummary(
            is_authed=True, is_admin=identity.is_admin, email=identity.email
        )


def parse_visitor_key(raw: str | None) -> VisitorKey | None:
    """Parse a visitor key header value, ignoring malformed keys."""
    if raw is None:
        return None
    try:
        return VisitorKey(raw)
    except PydanticValidationError:
        return None
