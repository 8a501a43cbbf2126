"""Unit tests for RateLimitService."""

import pytest

from guestbook.domain.error import TooManyRequestsError
from guestbook.domain.repository import EntryRepository
from guestbook.domain.service import RateLimitService
from tests.conftest import make_entry, member, minutes_ago, visitor
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestRateLimitCheck:
    """Tests for RateLimitService.check."""

    @pytest.mark.asyncio
    async def test_allows_up_to_the_limit(self, unit_env):
        # Arrange
        rate_limit_service = await unit_env.get(RateLimitService)
        entry_repo = await unit_env.get(EntryRepository)
        author = visitor()
        for _ in range(rate_limit_service.settings.max_entries - 1):
            await entry_repo.save(make_entry(author=author))

        # Act & Assert - no exception
        await rate_limit_service.check(author)

    @pytest.mark.asyncio
    async def test_rejects_identity_with_full_window(self, unit_env):
        # Arrange
        rate_limit_service = await unit_env.get(RateLimitService)
        entry_repo = await unit_env.get(EntryRepository)
        author = visitor()
        for _ in range(rate_limit_service.settings.max_entries):
            await entry_repo.save(make_entry(author=author))

        # Act & Assert
        with pytest.raises(TooManyRequestsError) as exc_info:
            await rate_limit_service.check(author)
        assert exc_info.value.scope == "identity"

    @pytest.mark.asyncio
    async def test_counts_authenticated_users_by_user_id(self, unit_env):
        # Arrange
        rate_limit_service = await unit_env.get(RateLimitService)
        entry_repo = await unit_env.get(EntryRepository)
        author = member()
        for _ in range(rate_limit_service.settings.max_entries):
            await entry_repo.save(make_entry(author=author))

        # Act & Assert
        with pytest.raises(TooManyRequestsError):
            await rate_limit_service.check(author)

    @pytest.mark.asyncio
    async def test_signing_in_does_not_reset_the_window(self, unit_env):
        """Entries posted as a visitor count against the signed-in caller."""
        # Arrange
        rate_limit_service = await unit_env.get(RateLimitService)
        entry_repo = await unit_env.get(EntryRepository)
        as_visitor = visitor("visitor-key-1")
        for _ in range(rate_limit_service.settings.max_entries - 1):
            await entry_repo.save(make_entry(author=as_visitor))
        signed_in = member(visitor_key="visitor-key-1")
        await entry_repo.save(make_entry(author=signed_in))

        # Act & Assert
        with pytest.raises(TooManyRequestsError) as exc_info:
            await rate_limit_service.check(signed_in)
        assert exc_info.value.scope == "identity"

    @pytest.mark.asyncio
    async def test_old_entries_fall_out_of_the_window(self, unit_env):
        # Arrange
        rate_limit_service = await unit_env.get(RateLimitService)
        entry_repo = await unit_env.get(EntryRepository)
        author = visitor()
        for _ in range(rate_limit_service.settings.max_entries):
            await entry_repo.save(make_entry(author=author, created_at=minutes_ago(2)))

        # Act & Assert - no exception
        await rate_limit_service.check(author)

    @pytest.mark.asyncio
    async def test_rejects_origin_shared_by_many_identities(self, unit_env):
        """Rotating visitor keys does not escape the per-origin window."""
        # Arrange
        rate_limit_service = await unit_env.get(RateLimitService)
        entry_repo = await unit_env.get(EntryRepository)
        for _ in range(rate_limit_service.settings.max_entries):
            await entry_repo.save(make_entry(author=visitor(), origin="203.0.113.7"))

        # Act & Assert
        with pytest.raises(TooManyRequestsError) as exc_info:
            await rate_limit_service.check(visitor(), origin="203.0.113.7")
        assert exc_info.value.scope == "origin"

    @pytest.mark.asyncio
    async def test_other_origins_are_not_affected(self, unit_env):
        # Arrange
        rate_limit_service = await unit_env.get(RateLimitService)
        entry_repo = await unit_env.get(EntryRepository)
        for _ in range(rate_limit_service.settings.max_entries):
            await entry_repo.save(make_entry(author=visitor(), origin="203.0.113.7"))

        # Act & Assert - no exception
        await rate_limit_service.check(visitor(), origin="198.51.100.1")
