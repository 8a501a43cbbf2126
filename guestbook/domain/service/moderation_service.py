"""Moderation overlay service.

Entries and chat transcripts are exposed to the administrator as one list
of posts. Entries are moderated through their own status; chat messages
are append-only and are hidden with tombstones instead.
"""

from typing import List, Optional
from uuid import UUID

import logfire
from pydantic import BaseModel

from guestbook.config import ModerationSettings
from guestbook.domain.error import ForbiddenError, NotFoundError, ValidationError
from guestbook.domain.model import (
    AuthorPostGroup,
    ChatMessage,
    Entry,
    ModerationPost,
    PostAuthor,
    Tombstone,
    UserProfile,
)
from guestbook.domain.model.common import utcnow
from guestbook.domain.repository import (
    AuthorGroupRepository,
    ChatMessageRepository,
    EntryRepository,
    TombstoneRepository,
    UserProfileRepository,
)
from guestbook.domain.value import (
    ChatMessageId,
    EntryId,
    GlobalPostId,
    Identity,
    PostSource,
    UserId,
)

from .base import Service
from .entry_service import EntryService

ANONYMOUS_USER_FILTER = "anonymous"


class ModerationPage(BaseModel):
    """One page of the unified moderation listing."""

    posts: List[ModerationPost]
    total: int
    page: int
    page_size: int


class ModerationService(Service):
    """Admin-only unified view over entries and chat messages."""

    def __init__(
        self,
        entry_repository: EntryRepository,
        chat_message_repository: ChatMessageRepository,
        tombstone_repository: TombstoneRepository,
        user_profile_repository: UserProfileRepository,
        author_group_repository: AuthorGroupRepository,
        entry_service: EntryService,
        settings: ModerationSettings,
    ) -> None:
        """Initialize moderation service.

        Args:
            entry_repository: Entry repository
            chat_message_repository: Read-only chat transcript repository
            tombstone_repository: Tombstone repository
            user_profile_repository: Profile lookup for author names/emails
            author_group_repository: Per-identity summary counts
            entry_service: Entry service (delete/restore of entries)
            settings: Moderation settings
        """
        self.entry_repository = entry_repository
        self.chat_message_repository = chat_message_repository
        self.tombstone_repository = tombstone_repository
        self.user_profile_repository = user_profile_repository
        self.author_group_repository = author_group_repository
        self.entry_service = entry_service
        self.settings = settings

    async def list_unified_posts(
        self,
        identity: Optional[Identity],
        q: Optional[str] = None,
        user: Optional[str] = None,
        source: Optional[PostSource] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> ModerationPage:
        """List visible posts from all sources, newest first.

        Each source is queried for enough rows to fill the requested page,
        then the results are merged by ``created_at``. Tombstoned chat ids
        and deleted entry ids are fetched wholesale, up to
        ``tombstone_scan_limit``; beyond that cap hidden records may leak
        into the listing.

        Entries whose parent or root is deleted are suppressed after
        fetching, so a page may come back shorter than ``page_size``.

        Args:
            identity: Caller (must be admin)
            q: Case-insensitive content filter
            user: Author user id, or ``"anonymous"`` for anonymous authors
            source: Restrict to one source
            page: 1-based page number
            page_size: Posts per page (1..max_page_size)

        Returns:
            Page of posts plus the combined total

        Raises:
            ForbiddenError: If the caller is not admin
            ValidationError: If ``user`` is neither a UUID nor "anonymous"
        """
        self._require_admin(identity, "posts")

        page = max(1, page)
        page_size = max(
            1,
            min(self.settings.max_page_size, page_size or self.settings.default_page_size),
        )
        q = (q or "").strip() or None
        author_user_id, anonymous_only = _parse_user_filter(user)
        fetch = page * page_size
        cap = self.settings.tombstone_scan_limit

        with logfire.span(
            "moderation_service.list_unified_posts",
            page=page,
            page_size=page_size,
            source=source.value if source else None,
        ):
            posts: List[ModerationPost] = []
            total = 0

            if source in (None, PostSource.FEEDBACK):
                deleted_ids = await self.entry_repository.find_deleted_ids(cap)
                entries = await self.entry_repository.find_for_moderation(
                    q=q,
                    author_user_id=author_user_id,
                    anonymous_only=anonymous_only,
                    limit=fetch,
                )
                total += await self.entry_repository.count_for_moderation(
                    q=q, author_user_id=author_user_id, anonymous_only=anonymous_only
                )
                visible = [
                    e
                    for e in entries
                    if e.parent_id not in deleted_ids and e.root_id not in deleted_ids
                ]
                if len(visible) < len(entries):
                    logfire.debug(
                        "Suppressed entries under deleted ancestors",
                        count=len(entries) - len(visible),
                    )
                profiles = await self._profiles_for(
                    [e.author_user_id for e in visible]
                )
                posts.extend(_entry_to_post(e, profiles) for e in visible)

            if source in (None, PostSource.CHAT):
                tombstoned = await self.tombstone_repository.find_ref_ids(
                    PostSource.CHAT, cap
                )
                exclude = [ChatMessageId(ref) for ref in tombstoned]
                messages = await self.chat_message_repository.find_for_moderation(
                    exclude_ids=exclude,
                    q=q,
                    user_id=author_user_id,
                    anonymous_only=anonymous_only,
                    limit=fetch,
                )
                total += await self.chat_message_repository.count_for_moderation(
                    exclude_ids=exclude,
                    q=q,
                    user_id=author_user_id,
                    anonymous_only=anonymous_only,
                )
                profiles = await self._profiles_for([m.user_id for m in messages])
                posts.extend(_message_to_post(m, profiles) for m in messages)

            posts.sort(key=lambda p: p.created_at, reverse=True)
            offset = (page - 1) * page_size

            return ModerationPage(
                posts=posts[offset : offset + page_size],
                total=total,
                page=page,
                page_size=page_size,
            )

    async def get_post(
        self, identity: Optional[Identity], global_id: GlobalPostId
    ) -> ModerationPost:
        """Resolve one post from either source, whether hidden or not.

        Raises:
            ForbiddenError: If the caller is not admin
            NotFoundError: If the record does not exist
        """
        self._require_admin(identity, "posts")

        with logfire.span("moderation_service.get_post", global_id=str(global_id)):
            if global_id.source == PostSource.FEEDBACK:
                entry = await self.entry_repository.find_by_id(
                    EntryId(global_id.source_ref_id)
                )
                if entry is None:
                    raise NotFoundError("Post", str(global_id))
                profiles = await self._profiles_for([entry.author_user_id])
                return _entry_to_post(entry, profiles)

            message = await self.chat_message_repository.find_by_id(
                ChatMessageId(global_id.source_ref_id)
            )
            if message is None:
                raise NotFoundError("Post", str(global_id))
            tombstone = await self.tombstone_repository.find(
                PostSource.CHAT, global_id.source_ref_id
            )
            profiles = await self._profiles_for([message.user_id])
            return _message_to_post(message, profiles, deleted=tombstone is not None)

    async def set_deleted(
        self, identity: Optional[Identity], global_id: GlobalPostId, deleted: bool
    ) -> ModerationPost:
        """Hide or unhide a post.

        Entries go through the entry store's delete/restore, so the
        configured delete policy applies. Chat messages get a tombstone
        created or removed; the message row itself is never touched.

        Returns:
            The post as seen after the change

        Raises:
            ForbiddenError: If the caller is not admin
            NotFoundError: If the record does not exist
        """
        admin = self._require_admin(identity, "posts")

        with logfire.span(
            "moderation_service.set_deleted",
            global_id=str(global_id),
            deleted=deleted,
        ):
            if global_id.source == PostSource.FEEDBACK:
                entry_id = EntryId(global_id.source_ref_id)
                if deleted:
                    await self.entry_service.soft_delete(admin, entry_id)
                else:
                    await self.entry_service.restore(admin, entry_id)
            else:
                message = await self.chat_message_repository.find_by_id(
                    ChatMessageId(global_id.source_ref_id)
                )
                if message is None:
                    raise NotFoundError("Post", str(global_id))
                if deleted:
                    await self.tombstone_repository.upsert(
                        Tombstone(
                            source=PostSource.CHAT,
                            source_ref_id=global_id.source_ref_id,
                            deleted_at=utcnow(),
                        )
                    )
                else:
                    await self.tombstone_repository.delete(
                        PostSource.CHAT, global_id.source_ref_id
                    )

            logfire.info(
                "Post moderated", global_id=str(global_id), deleted=deleted
            )
            return await self.get_post(admin, global_id)

    async def list_author_groups(
        self,
        identity: Optional[Identity],
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> List[AuthorPostGroup]:
        """Per-identity active/deleted/reaction counts, with profile names.

        Raises:
            ForbiddenError: If the caller is not admin
        """
        self._require_admin(identity, "authors")

        page = max(1, page)
        page_size = max(
            1,
            min(self.settings.max_page_size, page_size or self.settings.default_page_size),
        )

        with logfire.span("moderation_service.list_author_groups", page=page):
            groups = await self.author_group_repository.find_all(
                limit=page_size, offset=(page - 1) * page_size
            )
            user_ids = [uid for uid in (_as_user_id(g.group_key) for g in groups) if uid]
            profiles = await self._profiles_for(user_ids)

            result = []
            for group in groups:
                profile = profiles.get(_as_user_id(group.group_key))
                if profile and profile.username:
                    group = group.model_copy(update={"name": profile.username})
                result.append(group)
            return result

    def _require_admin(self, identity: Optional[Identity], resource: str) -> Identity:
        if identity is None or not identity.is_admin:
            logfire.warn(
                "Moderation access denied",
                identity_key=identity.key if identity else None,
            )
            raise ForbiddenError(
                "Moderation", resource, identity.key if identity else None
            )
        return identity

    async def _profiles_for(
        self, user_ids: List[Optional[UserId]]
    ) -> dict[UserId, UserProfile]:
        unique = list({uid for uid in user_ids if uid is not None})
        if not unique:
            return {}
        profiles = await self.user_profile_repository.find_by_user_ids(unique)
        return {p.user_id: p for p in profiles}


def _parse_user_filter(user: Optional[str]) -> tuple[Optional[UserId], bool]:
    user = (user or "").strip()
    if not user:
        return None, False
    if user.lower() == ANONYMOUS_USER_FILTER:
        return None, True
    try:
        return UserId(UUID(user)), False
    except ValueError:
        raise ValidationError(f"Invalid user filter: {user}")


def _as_user_id(group_key: str) -> Optional[UserId]:
    try:
        return UserId(UUID(group_key))
    except ValueError:
        return None


def _author(
    user_id: Optional[UserId],
    fallback_name: Optional[str],
    profiles: dict[UserId, UserProfile],
) -> PostAuthor:
    profile = profiles.get(user_id) if user_id else None
    return PostAuthor(
        user_id=user_id,
        name=(profile.username if profile and profile.username else fallback_name),
        email=profile.email if profile else None,
    )


def _entry_to_post(entry: Entry, profiles: dict[UserId, UserProfile]) -> ModerationPost:
    return ModerationPost(
        global_id=GlobalPostId(source=PostSource.FEEDBACK, source_ref_id=entry.id),
        created_at=entry.created_at,
        author=_author(entry.author_user_id, entry.author_name, profiles),
        content=entry.content,
        parent_id=entry.parent_id,
        deleted=entry.is_deleted,
    )


def _message_to_post(
    message: ChatMessage,
    profiles: dict[UserId, UserProfile],
    deleted: bool = False,
) -> ModerationPost:
    return ModerationPost(
        global_id=GlobalPostId(source=PostSource.CHAT, source_ref_id=message.id),
        created_at=message.created_at,
        author=_author(message.user_id, None, profiles),
        content=message.content,
        deleted=deleted,
    )
