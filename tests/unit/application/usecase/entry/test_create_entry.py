"""Unit tests for CreateEntryUseCase."""

import pytest

from guestbook.application.usecase.entry import CreateEntryRequest, CreateEntryUseCase
from guestbook.domain.error import TooManyRequestsError
from guestbook.domain.repository import EntryRepository
from tests.conftest import make_entry, visitor
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateEntryUseCase:
    """Tests for CreateEntryUseCase."""

    @pytest.mark.asyncio
    async def test_returns_view_owned_by_author(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateEntryUseCase)
        author = visitor()

        # Act
        response = await use_case.execute(
            CreateEntryRequest(
                identity=author,
                content="First!",
                author_name="  Grace ",
                origin="198.51.100.1",
            )
        )

        # Assert
        entry = response.entry
        assert entry.content == "First!"
        assert entry.author_name == "Grace"
        assert entry.mine is True
        assert entry.stats.like == 0
        assert entry.root_id == entry.id

    @pytest.mark.asyncio
    async def test_rate_limit_runs_before_creation(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateEntryUseCase)
        entry_repo = await unit_env.get(EntryRepository)
        author = visitor()
        limit = use_case.rate_limit_service.settings.max_entries
        for _ in range(limit):
            await entry_repo.save(make_entry(author=author))

        # Act & Assert
        with pytest.raises(TooManyRequestsError):
            await use_case.execute(
                CreateEntryRequest(identity=author, content="one too many")
            )
        assert await entry_repo.count() == limit
