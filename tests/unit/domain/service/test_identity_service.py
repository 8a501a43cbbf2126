"""Unit tests for IdentityService."""

from uuid import uuid4

import pytest

from guestbook.config import AuthSettings
from guestbook.domain.error import UnauthenticatedError
from guestbook.domain.service import IdentityService, JWTService


def make_service(admin_email: str | None = "Admin@Example.com") -> IdentityService:
    settings = AuthSettings(
        jwt_secret="test-secret-for-identity-service-tests", admin_email=admin_email
    )
    return IdentityService(JWTService(settings), settings)


class TestResolve:
    """Tests for IdentityService.resolve."""

    def test_nothing_presented_resolves_to_none(self):
        service = make_service()

        assert service.resolve(None, None) is None

    def test_visitor_key_only(self):
        service = make_service()

        identity = service.resolve(None, "visitor-key-1")

        assert identity is not None
        assert not identity.is_authenticated
        assert identity.key == "visitor-key-1"

    def test_malformed_visitor_key_is_ignored(self):
        service = make_service()

        assert service.resolve(None, "bad key!") is None

    def test_valid_token_takes_precedence_over_visitor_key(self):
        service = make_service()
        user_id = str(uuid4())
        token = service.jwt_service.create_token(user_id, name="Ada")

        identity = service.resolve(token, "visitor-key-1")

        assert identity.key == user_id
        assert identity.keys == [user_id, "visitor-key-1"]
        assert identity.display_name == "Ada"
        assert not identity.is_admin

    def test_invalid_token_is_treated_as_absent(self):
        service = make_service()

        identity = service.resolve("not-a-jwt", "visitor-key-1")

        assert identity is not None
        assert not identity.is_authenticated

    def test_token_signed_with_another_secret_is_rejected(self):
        service = make_service()
        other = JWTService(
            AuthSettings(jwt_secret="another-secret-that-signs-foreign-tokens")
        )
        token = other.create_token(str(uuid4()))

        assert service.resolve(token, None) is None

    def test_malformed_user_id_in_token_is_treated_as_absent(self):
        service = make_service()
        token = service.jwt_service.create_token("not-a-uuid")

        assert service.resolve(token, None) is None


class TestAdmin:
    """Tests for administrator detection."""

    def test_verified_admin_email_matches_case_insensitively(self):
        service = make_service()
        token = service.jwt_service.create_token(
            str(uuid4()), email=" admin@example.COM ", email_verified=True
        )

        identity = service.resolve(token, None)

        assert identity.is_admin

    def test_unverified_admin_email_is_not_admin(self):
        service = make_service()
        token = service.jwt_service.create_token(
            str(uuid4()), email="admin@example.com", email_verified=False
        )

        assert not service.resolve(token, None).is_admin

    def test_no_admin_configured(self):
        service = make_service(admin_email=None)

        assert not service.is_admin_email("admin@example.com")


class TestRequire:
    """Tests for IdentityService.require."""

    def test_raises_when_no_identity(self):
        service = make_service()

        with pytest.raises(UnauthenticatedError):
            service.require(None, None, "post entries")


class TestViewerSummary:
    """Tests for get_viewer_summary."""

    def test_anonymous_visitor_is_not_authed(self):
        service = make_service()
        identity = service.resolve(None, "visitor-key-1")

        summary = service.get_viewer_summary(identity)

        assert summary.is_authed is False
        assert summary.is_admin is False
        assert summary.email is None

    def test_admin_summary(self):
        service = make_service()
        token = service.jwt_service.create_token(
            str(uuid4()), email="admin@example.com", email_verified=True
        )

        summary = service.get_viewer_summary(service.resolve(token, None))

        assert summary.is_authed is True
        assert summary.is_admin is True
        assert summary.email == "admin@example.com"
