"""Integration tests for the PostgreSQL repositories.

Require a migrated PostgreSQL database reachable at ``DATABASE__URL``.
"""

import os

import pytest

from guestbook.domain.model import Reaction
from guestbook.domain.repository import EntryRepository, ReactionRepository
from guestbook.domain.value import EntryStatus, ReactionValue, StatusFilter
from tests.conftest import make_entry, minutes_ago, visitor
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    "DATABASE__URL" not in os.environ, reason="requires a PostgreSQL database"
)

integration_env = create_env_fixture(unmock={"persistence"})


class TestPostgresEntryRepository:
    """Round trips through the guestbook_entries table."""

    @pytest.mark.asyncio
    async def test_save_and_find_reply(self, integration_env):
        # Arrange
        entry_repo = await integration_env.get(EntryRepository)
        root = await entry_repo.save(make_entry("root", author_name="Ada"))
        reply = make_entry("reply", parent=root)

        # Act
        await entry_repo.save(reply)
        found = await entry_repo.find_by_id(reply.id)
        children = await entry_repo.find_children_of([root.id])

        # Assert
        assert found.root_id == root.id
        assert found.depth == 1
        assert [c.id for c in children] == [reply.id]

    @pytest.mark.asyncio
    async def test_count_active_children_ignores_deleted(self, integration_env):
        # Arrange
        entry_repo = await integration_env.get(EntryRepository)
        root = await entry_repo.save(make_entry("root"))
        await entry_repo.save(make_entry("kept", parent=root))
        await entry_repo.save(make_entry("", parent=root, status=EntryStatus.DELETED))

        # Act
        counts = await entry_repo.count_active_children([root.id])

        # Assert
        assert counts[root.id] == 1

    @pytest.mark.asyncio
    async def test_count_created_since_by_author_key(self, integration_env):
        # Arrange
        entry_repo = await integration_env.get(EntryRepository)
        author = visitor()
        await entry_repo.save(make_entry("old", author=author, created_at=minutes_ago(30)))
        await entry_repo.save(make_entry("new", author=author))

        # Act
        count = await entry_repo.count_created_since(
            minutes_ago(1), author_keys=[author.key]
        )

        # Assert
        assert count == 1

    @pytest.mark.asyncio
    async def test_deleted_listing_searches_author_name(self, integration_env):
        # Arrange
        entry_repo = await integration_env.get(EntryRepository)
        name = f"ghost-{visitor().key[-8:]}"
        entry = await entry_repo.save(
            make_entry("", status=EntryStatus.DELETED, author_name=name)
        )

        # Act
        found = await entry_repo.find_page(status=StatusFilter.DELETED, search=name)

        # Assert
        assert [e.id for e in found] == [entry.id]


class TestPostgresReactionRepository:
    """Upserts on the (entry, identity) primary key."""

    @pytest.mark.asyncio
    async def test_upsert_replaces_value(self, integration_env):
        # Arrange
        entry_repo = await integration_env.get(EntryRepository)
        reaction_repo = await integration_env.get(ReactionRepository)
        entry = await entry_repo.save(make_entry())
        key = visitor().key

        # Act
        await reaction_repo.upsert(
            Reaction(entry_id=entry.id, identity_key=key, value=ReactionValue.LIKE)
        )
        await reaction_repo.upsert(
            Reaction(entry_id=entry.id, identity_key=key, value=ReactionValue.DISLIKE)
        )
        reactions = await reaction_repo.find_by_entries([entry.id])

        # Assert
        assert len(reactions) == 1
        assert reactions[0].value == ReactionValue.DISLIKE
