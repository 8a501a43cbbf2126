"""JWT token domain service."""

import logfire

from guestbook.config import AuthSettings
from guestbook.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(
        self,
        user_id: str,
        email: str | None = None,
        email_verified: bool = False,
        name: str | None = None,
    ) -> str:
        """Create JWT token for user.

        Sessions are issued by the identity provider in production; this
        exists for local tooling and tests.

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            return create_token(
                user_id,
                self.auth_settings,
                email=email,
                email_verified=email_verified,
                name=name,
            )

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.debug("JWT token verified", user_id=payload.user_id)
                return payload
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def get_payload_from_token(self, token: str | None) -> TokenPayload | None:
        """Verify a token without raising.

        Args:
            token: JWT token string (optional)

        Returns:
            Payload if token is valid, None if missing or invalid
        """
        if not token:
            return None

        try:
            return self.verify_token(token)
        except Exception as e:
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
