"""Unit tests for ReactionService."""

from uuid import uuid4

import pytest

from guestbook.domain.error import InvalidStateError, NotFoundError
from guestbook.domain.repository import EntryRepository, ReactionRepository
from guestbook.domain.service import ReactionService
from guestbook.domain.value import EntryId, EntryStatus, ReactionValue
from tests.conftest import make_entry, member, visitor
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestSetReaction:
    """Tests for set_reaction and clear_reaction."""

    @pytest.mark.asyncio
    async def test_switching_replaces_previous_reaction(self, unit_env):
        """One identity holds at most one reaction per entry."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        entry_repo = await unit_env.get(EntryRepository)
        entry = await entry_repo.save(make_entry())
        fan = visitor()

        # Act
        await reaction_service.set_reaction(fan, entry.id, ReactionValue.LIKE)
        await reaction_service.set_reaction(fan, entry.id, ReactionValue.DISLIKE)

        # Assert
        stats = (await reaction_service.get_aggregate([entry.id], fan))[entry.id]
        assert stats.like == 0
        assert stats.dislike == 1
        assert stats.my_reaction == -1

    @pytest.mark.asyncio
    async def test_missing_entry(self, unit_env):
        reaction_service = await unit_env.get(ReactionService)

        with pytest.raises(NotFoundError):
            await reaction_service.set_reaction(
                visitor(), EntryId(uuid4()), ReactionValue.LIKE
            )

    @pytest.mark.asyncio
    async def test_deleted_entry_rejects_reactions(self, unit_env):
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        entry_repo = await unit_env.get(EntryRepository)
        entry = await entry_repo.save(make_entry("", status=EntryStatus.DELETED))

        # Act & Assert
        with pytest.raises(InvalidStateError):
            await reaction_service.set_reaction(
                visitor(), entry.id, ReactionValue.LIKE
            )

    @pytest.mark.asyncio
    async def test_clear_is_a_no_op_without_reaction(self, unit_env):
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        entry_repo = await unit_env.get(EntryRepository)
        reaction_repo = await unit_env.get(ReactionRepository)
        entry = await entry_repo.save(make_entry())
        fan = visitor()
        await reaction_service.set_reaction(fan, entry.id, ReactionValue.LIKE)

        # Act
        first = await reaction_service.clear_reaction(fan, entry.id)
        second = await reaction_service.clear_reaction(fan, entry.id)

        # Assert
        assert first is True
        assert second is False
        assert await reaction_repo.find_by_entries([entry.id]) == []

    @pytest.mark.asyncio
    async def test_signed_in_caller_clears_reaction_given_as_visitor(self, unit_env):
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        entry_repo = await unit_env.get(EntryRepository)
        entry = await entry_repo.save(make_entry())
        await reaction_service.set_reaction(
            visitor("visitor-key-1"), entry.id, ReactionValue.LIKE
        )
        signed_in = member(visitor_key="visitor-key-1")

        # Act
        removed = await reaction_service.clear_reaction(signed_in, entry.id)

        # Assert
        stats = (await reaction_service.get_aggregate([entry.id], signed_in))[entry.id]
        assert removed is True
        assert (stats.like, stats.dislike, stats.my_reaction) == (0, 0, 0)

    @pytest.mark.asyncio
    async def test_switch_after_sign_in_keeps_one_reaction(self, unit_env):
        """The visitor-key reaction is replaced, not counted next to the new one."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        entry_repo = await unit_env.get(EntryRepository)
        reaction_repo = await unit_env.get(ReactionRepository)
        entry = await entry_repo.save(make_entry())
        await reaction_service.set_reaction(
            visitor("visitor-key-1"), entry.id, ReactionValue.LIKE
        )
        signed_in = member(visitor_key="visitor-key-1")

        # Act
        await reaction_service.set_reaction(signed_in, entry.id, ReactionValue.DISLIKE)

        # Assert
        stats = (await reaction_service.get_aggregate([entry.id], signed_in))[entry.id]
        assert (stats.like, stats.dislike) == (0, 1)
        assert stats.my_reaction == -1
        rows = await reaction_repo.find_by_entries([entry.id])
        assert [r.identity_key for r in rows] == [signed_in.key]

    @pytest.mark.asyncio
    async def test_clear_then_set_after_sign_in(self, unit_env):
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        entry_repo = await unit_env.get(EntryRepository)
        entry = await entry_repo.save(make_entry())
        await reaction_service.set_reaction(
            visitor("visitor-key-1"), entry.id, ReactionValue.DISLIKE
        )
        signed_in = member(visitor_key="visitor-key-1")

        # Act
        await reaction_service.clear_reaction(signed_in, entry.id)
        await reaction_service.set_reaction(signed_in, entry.id, ReactionValue.LIKE)
        await reaction_service.set_reaction(signed_in, entry.id, ReactionValue.LIKE)

        # Assert
        stats = (await reaction_service.get_aggregate([entry.id], signed_in))[entry.id]
        assert (stats.like, stats.dislike, stats.my_reaction) == (1, 0, 1)


class TestGetAggregate:
    """Tests for get_aggregate."""

    @pytest.mark.asyncio
    async def test_counts_per_entry_and_zero_for_unreacted(self, unit_env):
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        entry_repo = await unit_env.get(EntryRepository)
        popular = await entry_repo.save(make_entry("popular"))
        quiet = await entry_repo.save(make_entry("quiet"))
        for _ in range(3):
            await reaction_service.set_reaction(
                visitor(), popular.id, ReactionValue.LIKE
            )
        await reaction_service.set_reaction(visitor(), popular.id, ReactionValue.DISLIKE)

        # Act
        stats = await reaction_service.get_aggregate([popular.id, quiet.id])

        # Assert
        assert (stats[popular.id].like, stats[popular.id].dislike) == (3, 1)
        assert stats[popular.id].my_reaction == 0
        assert (stats[quiet.id].like, stats[quiet.id].dislike) == (0, 0)

    @pytest.mark.asyncio
    async def test_my_reaction_found_under_earlier_visitor_key(self, unit_env):
        """A reaction given before sign-in still shows as the viewer's own."""
        # Arrange
        reaction_service = await unit_env.get(ReactionService)
        entry_repo = await unit_env.get(EntryRepository)
        entry = await entry_repo.save(make_entry())
        await reaction_service.set_reaction(
            visitor("visitor-key-1"), entry.id, ReactionValue.DISLIKE
        )

        # Act
        stats = await reaction_service.get_aggregate(
            [entry.id], member(visitor_key="visitor-key-1")
        )

        # Assert
        assert stats[entry.id].my_reaction == -1

    @pytest.mark.asyncio
    async def test_empty_request(self, unit_env):
        reaction_service = await unit_env.get(ReactionService)

        assert await reaction_service.get_aggregate([]) == {}
