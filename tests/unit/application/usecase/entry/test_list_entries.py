"""Unit tests for ListEntriesUseCase."""

import pytest

from guestbook.application.usecase.entry import ListEntriesRequest, ListEntriesUseCase
from guestbook.domain.repository import EntryRepository
from guestbook.domain.value import EntryStatus
from tests.conftest import make_entry, minutes_ago
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestListEntriesUseCase:
    """Tests for ListEntriesUseCase."""

    @pytest.mark.asyncio
    async def test_roots_carry_comment_counts_and_status_counts(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListEntriesUseCase)
        entry_repo = await unit_env.get(EntryRepository)
        root = await entry_repo.save(make_entry("root", created_at=minutes_ago(5)))
        await entry_repo.save(make_entry("reply", parent=root, created_at=minutes_ago(4)))
        await entry_repo.save(
            make_entry("", status=EntryStatus.DELETED, created_at=minutes_ago(3))
        )

        # Act
        response = await use_case.execute(ListEntriesRequest(with_counts=True))

        # Assert
        assert [e.id for e in response.entries] == [str(root.id)]
        assert response.entries[0].comment_count == 1
        assert response.counts.active == 1
        assert response.counts.deleted == 1
        assert response.page == 1
        assert response.page_size == 20

    @pytest.mark.asyncio
    async def test_replies_have_no_comment_count(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListEntriesUseCase)
        entry_repo = await unit_env.get(EntryRepository)
        root = await entry_repo.save(make_entry("root"))
        await entry_repo.save(make_entry("reply", parent=root))

        # Act
        response = await use_case.execute(ListEntriesRequest(parent_id=root.id))

        # Assert
        assert len(response.entries) == 1
        assert response.entries[0].comment_count is None
        assert response.counts is None
