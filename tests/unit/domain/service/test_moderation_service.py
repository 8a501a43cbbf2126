"""Unit tests for ModerationService."""

from uuid import uuid4

import pytest

from guestbook.domain.error import ForbiddenError, NotFoundError, ValidationError
from guestbook.domain.model import ChatMessage, Reaction, UserProfile
from guestbook.domain.repository import (
    EntryRepository,
    ReactionRepository,
    TombstoneRepository,
)
from guestbook.domain.service import ModerationService
from guestbook.domain.value import (
    ChatMessageId,
    ChatSessionId,
    EntryStatus,
    GlobalPostId,
    PostSource,
    ReactionValue,
    UserId,
)
from guestbook.persistence.repository.inmemory import InMemoryDatabase
from tests.conftest import admin, make_entry, member, minutes_ago, visitor
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def chat_message(
    content: str = "chat line",
    user_id: UserId | None = None,
    minutes: int = 1,
) -> ChatMessage:
    return ChatMessage(
        id=ChatMessageId(uuid4()),
        session_id=ChatSessionId(uuid4()),
        user_id=user_id,
        role="user",
        content=content,
        created_at=minutes_ago(minutes),
    )


class TestAuthorization:
    """Every moderation operation is admin only."""

    @pytest.mark.asyncio
    async def test_anonymous_caller_is_forbidden(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)

        with pytest.raises(ForbiddenError):
            await moderation_service.list_unified_posts(None)

    @pytest.mark.asyncio
    async def test_non_admin_member_is_forbidden(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)

        with pytest.raises(ForbiddenError):
            await moderation_service.list_author_groups(member())

    @pytest.mark.asyncio
    async def test_non_admin_cannot_toggle(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        gid = GlobalPostId(source=PostSource.CHAT, source_ref_id=uuid4())

        with pytest.raises(ForbiddenError):
            await moderation_service.set_deleted(visitor(), gid, True)


class TestListUnifiedPosts:
    """Tests for the merged listing."""

    @pytest.mark.asyncio
    async def test_merges_sources_newest_first(self, unit_env):
        # Arrange
        moderation_service = await unit_env.get(ModerationService)
        entry_repo = await unit_env.get(EntryRepository)
        db = await unit_env.get(InMemoryDatabase)
        e_old = await entry_repo.save(make_entry("entry old", created_at=minutes_ago(30)))
        e_new = await entry_repo.save(make_entry("entry new", created_at=minutes_ago(10)))
        m_mid = db.add_chat_message(chat_message("chat mid", minutes=20))
        m_newest = db.add_chat_message(chat_message("chat newest", minutes=5))

        # Act
        page = await moderation_service.list_unified_posts(admin())

        # Assert
        assert [p.source_ref_id for p in page.posts] == [
            m_newest.id,
            e_new.id,
            m_mid.id,
            e_old.id,
        ]
        assert page.total == 4

    @pytest.mark.asyncio
    async def test_second_page_is_sliced_from_merged_order(self, unit_env):
        # Arrange
        moderation_service = await unit_env.get(ModerationService)
        entry_repo = await unit_env.get(EntryRepository)
        db = await unit_env.get(InMemoryDatabase)
        expected = []
        for minutes in range(1, 7):
            if minutes % 2:
                post = await entry_repo.save(
                    make_entry(f"entry {minutes}", created_at=minutes_ago(minutes))
                )
            else:
                post = db.add_chat_message(chat_message(f"chat {minutes}", minutes=minutes))
            expected.append(post.id)

        # Act
        page = await moderation_service.list_unified_posts(
            admin(), page=2, page_size=2
        )

        # Assert
        assert [p.source_ref_id for p in page.posts] == expected[2:4]
        assert page.total == 6

    @pytest.mark.asyncio
    async def test_excludes_deleted_and_tombstoned_posts(self, unit_env):
        # Arrange
        moderation_service = await unit_env.get(ModerationService)
        entry_repo = await unit_env.get(EntryRepository)
        db = await unit_env.get(InMemoryDatabase)
        root = await entry_repo.save(
            make_entry("", status=EntryStatus.DELETED, created_at=minutes_ago(10))
        )
        orphan = await entry_repo.save(
            make_entry("reply under deleted root", parent=root, created_at=minutes_ago(9))
        )
        visible = await entry_repo.save(make_entry("visible", created_at=minutes_ago(8)))
        hidden_chat = db.add_chat_message(chat_message("hidden"))
        moderator = admin()
        await moderation_service.set_deleted(
            moderator,
            GlobalPostId(source=PostSource.CHAT, source_ref_id=hidden_chat.id),
            True,
        )

        # Act
        page = await moderation_service.list_unified_posts(moderator)

        # Assert
        ids = [p.source_ref_id for p in page.posts]
        assert ids == [visible.id]
        assert root.id not in ids
        assert orphan.id not in ids

    @pytest.mark.asyncio
    async def test_filters_by_query_user_and_source(self, unit_env):
        # Arrange
        moderation_service = await unit_env.get(ModerationService)
        entry_repo = await unit_env.get(EntryRepository)
        db = await unit_env.get(InMemoryDatabase)
        user = member()
        mine = await entry_repo.save(make_entry("Needle from user", author=user))
        anon = await entry_repo.save(make_entry("needle anonymous"))
        chat = db.add_chat_message(chat_message("needle in chat", user_id=user.user_id))
        await entry_repo.save(make_entry("haystack"))
        moderator = admin()

        # Act
        by_query = await moderation_service.list_unified_posts(moderator, q="NEEDLE")
        by_user = await moderation_service.list_unified_posts(
            moderator, user=str(user.user_id)
        )
        anonymous = await moderation_service.list_unified_posts(
            moderator, user="anonymous", source=PostSource.FEEDBACK
        )
        chat_only = await moderation_service.list_unified_posts(
            moderator, source=PostSource.CHAT
        )

        # Assert
        assert {p.source_ref_id for p in by_query.posts} == {mine.id, anon.id, chat.id}
        assert {p.source_ref_id for p in by_user.posts} == {mine.id, chat.id}
        assert anon.id in {p.source_ref_id for p in anonymous.posts}
        assert mine.id not in {p.source_ref_id for p in anonymous.posts}
        assert [p.source_ref_id for p in chat_only.posts] == [chat.id]

    @pytest.mark.asyncio
    async def test_invalid_user_filter(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)

        with pytest.raises(ValidationError):
            await moderation_service.list_unified_posts(admin(), user="not-a-uuid")

    @pytest.mark.asyncio
    async def test_author_profile_is_attached(self, unit_env):
        # Arrange
        moderation_service = await unit_env.get(ModerationService)
        entry_repo = await unit_env.get(EntryRepository)
        db = await unit_env.get(InMemoryDatabase)
        user = member()
        db.add_profile(
            UserProfile(user_id=user.user_id, username="ada", email="ada@example.com")
        )
        await entry_repo.save(make_entry("hi", author=user))

        # Act
        page = await moderation_service.list_unified_posts(admin())

        # Assert
        author = page.posts[0].author
        assert author.user_id == user.user_id
        assert author.name == "ada"
        assert author.email == "ada@example.com"


class TestSetDeleted:
    """Tests for the moderation toggle."""

    @pytest.mark.asyncio
    async def test_chat_toggle_creates_and_removes_tombstone(self, unit_env):
        # Arrange
        moderation_service = await unit_env.get(ModerationService)
        tombstone_repo = await unit_env.get(TombstoneRepository)
        db = await unit_env.get(InMemoryDatabase)
        message = db.add_chat_message(chat_message())
        gid = GlobalPostId(source=PostSource.CHAT, source_ref_id=message.id)
        moderator = admin()

        # Act
        hidden = await moderation_service.set_deleted(moderator, gid, True)
        tombstone = await tombstone_repo.find(PostSource.CHAT, message.id)
        shown = await moderation_service.set_deleted(moderator, gid, False)

        # Assert
        assert hidden.deleted is True
        assert tombstone is not None
        assert shown.deleted is False
        assert await tombstone_repo.find(PostSource.CHAT, message.id) is None
        assert db.chat_messages[message.id].content == message.content

    @pytest.mark.asyncio
    async def test_feedback_toggle_uses_entry_delete_and_restore(self, unit_env):
        # Arrange
        moderation_service = await unit_env.get(ModerationService)
        entry_repo = await unit_env.get(EntryRepository)
        entry = await entry_repo.save(make_entry("spam"))
        gid = GlobalPostId(source=PostSource.FEEDBACK, source_ref_id=entry.id)
        moderator = admin()

        # Act
        hidden = await moderation_service.set_deleted(moderator, gid, True)
        stored = await entry_repo.find_by_id(entry.id)
        shown = await moderation_service.set_deleted(moderator, gid, False)

        # Assert
        assert hidden.deleted is True
        assert stored.status == EntryStatus.DELETED
        assert stored.content == ""
        assert shown.deleted is False

    @pytest.mark.asyncio
    async def test_missing_chat_message(self, unit_env):
        moderation_service = await unit_env.get(ModerationService)
        gid = GlobalPostId(source=PostSource.CHAT, source_ref_id=uuid4())

        with pytest.raises(NotFoundError):
            await moderation_service.set_deleted(admin(), gid, True)

    @pytest.mark.asyncio
    async def test_get_post_resolves_hidden_records(self, unit_env):
        # Arrange
        moderation_service = await unit_env.get(ModerationService)
        db = await unit_env.get(InMemoryDatabase)
        message = db.add_chat_message(chat_message())
        gid = GlobalPostId(source=PostSource.CHAT, source_ref_id=message.id)
        moderator = admin()
        await moderation_service.set_deleted(moderator, gid, True)

        # Act
        post = await moderation_service.get_post(moderator, gid)

        # Assert
        assert post.deleted is True
        assert post.content == message.content


class TestListAuthorGroups:
    """Tests for list_author_groups."""

    @pytest.mark.asyncio
    async def test_counts_posts_and_reactions_per_identity(self, unit_env):
        # Arrange
        moderation_service = await unit_env.get(ModerationService)
        entry_repo = await unit_env.get(EntryRepository)
        reaction_repo = await unit_env.get(ReactionRepository)
        db = await unit_env.get(InMemoryDatabase)
        user = member()
        db.add_profile(UserProfile(user_id=user.user_id, username="ada"))
        first = await entry_repo.save(make_entry("one", author=user))
        await entry_repo.save(make_entry("", author=user, status=EntryStatus.DELETED))
        anon = visitor()
        await entry_repo.save(make_entry("anon", author=anon))
        await reaction_repo.upsert(
            Reaction(entry_id=first.id, identity_key=anon.key, value=ReactionValue.LIKE)
        )

        # Act
        groups = await moderation_service.list_author_groups(admin())

        # Assert
        by_key = {g.group_key: g for g in groups}
        assert groups[0].group_key == str(user.user_id)
        assert by_key[str(user.user_id)].active_count == 1
        assert by_key[str(user.user_id)].deleted_count == 1
        assert by_key[str(user.user_id)].name == "ada"
        assert by_key[anon.key].active_count == 1
        assert by_key[anon.key].reaction_count == 1
        assert by_key[anon.key].name is None
