"""Entry domain service."""

from typing import List, Optional
from uuid import uuid4

import logfire
from pydantic import BaseModel

from guestbook.config import GuestbookSettings
from guestbook.domain.error import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    UnauthenticatedError,
)
from guestbook.domain.model import Entry
from guestbook.domain.model.common import utcnow
from guestbook.domain.repository import EntryRepository, UserProfileRepository
from guestbook.domain.value import (
    ContentType,
    EntryId,
    EntryStatus,
    Identity,
    StatusFilter,
    UserId,
)

from .base import Service
from .content_policy import ContentPolicy


class EntryPage(BaseModel):
    """One page of a root or child listing."""

    entries: List[Entry]
    total: int
    page: int
    page_size: int
    # Active direct children per entry; only filled for root listings
    child_counts: dict[EntryId, int] = {}
    # Root counts per status, when requested
    root_counts: Optional[dict[EntryStatus, int]] = None


class EntryService(Service):
    """Domain service for the threaded entry store."""

    def __init__(
        self,
        entry_repository: EntryRepository,
        user_profile_repository: UserProfileRepository,
        content_policy: ContentPolicy,
        settings: GuestbookSettings,
    ) -> None:
        """Initialize entry service.

        Args:
            entry_repository: Entry repository
            user_profile_repository: Profile lookup for live display names
            content_policy: Content validation rules
            settings: Guestbook settings (depth cap, delete policy, paging)
        """
        self.entry_repository = entry_repository
        self.user_profile_repository = user_profile_repository
        self.content_policy = content_policy
        self.settings = settings

    async def create_entry(
        self,
        identity: Identity,
        content: str,
        content_type: ContentType = ContentType.PLAIN,
        parent_id: Optional[EntryId] = None,
        author_name: Optional[str] = None,
        origin: Optional[str] = None,
    ) -> Entry:
        """Create a root entry or a reply.

        Replies inherit the parent's root and sit one level deeper, up to
        the configured maximum depth; beyond it they stay at that depth.

        Args:
            identity: Author identity
            content: Raw content (trimmed before validation)
            content_type: Content format
            parent_id: Parent entry for replies
            author_name: Display name supplied by the client
            origin: Network origin of the request

        Returns:
            The created entry

        Raises:
            ValidationError: If content or name fail validation
            NotFoundError: If the parent does not exist
            InvalidStateError: If the parent is deleted
        """
        with logfire.span(
            "entry_service.create_entry",
            identity_key=identity.key,
            parent_id=str(parent_id) if parent_id else None,
        ):
            content = self.content_policy.normalize_content(content, content_type)
            name = await self._resolve_author_name(identity, author_name)

            entry_id = EntryId(uuid4())
            now = utcnow()
            fields: dict = {
                "id": entry_id,
                "root_id": entry_id,
                "parent_id": None,
                "depth": 0,
            }

            if parent_id is not None:
                parent = await self.entry_repository.find_by_id(parent_id)
                if parent is None:
                    raise NotFoundError("Entry", str(parent_id))
                if parent.is_deleted:
                    logfire.warn("Reply to deleted entry", parent_id=str(parent_id))
                    raise InvalidStateError("Cannot reply to a deleted entry")

                fields.update(
                    parent_id=parent.id,
                    root_id=parent.root_id or parent.id,
                    depth=min(parent.depth + 1, self.settings.max_depth),
                    reply_to_user_id=parent.author_user_id,
                    reply_to_key=parent.author_key,
                    reply_to_name=await self.display_name_for(parent),
                )

            entry = Entry(
                **fields,
                author_user_id=identity.user_id,
                # New entries carry exactly one identity variant
                author_key=None if identity.is_authenticated else identity.key,
                author_name=name,
                content=content,
                content_type=content_type,
                status=EntryStatus.ACTIVE,
                origin=origin,
                created_at=now,
                updated_at=now,
            )

            saved = await self.entry_repository.save(entry)
            logfire.info(
                "Entry created",
                entry_id=str(saved.id),
                root_id=str(saved.root_id),
                depth=saved.depth,
            )
            return saved

    async def get_entry(self, entry_id: EntryId) -> Entry:
        """Get an entry by ID, any status.

        Raises:
            NotFoundError: If the entry does not exist
        """
        entry = await self.entry_repository.find_by_id(entry_id)
        if entry is None:
            raise NotFoundError("Entry", str(entry_id))
        return entry

    async def list_entries(
        self,
        parent_id: Optional[EntryId] = None,
        status: StatusFilter = StatusFilter.ACTIVE,
        search: Optional[str] = None,
        page: int = 1,
        page_size: Optional[int] = None,
        with_counts: bool = False,
    ) -> EntryPage:
        """List roots (newest first) or the direct children of a parent (oldest first).

        Out-of-range paging values are clamped rather than rejected.

        Args:
            parent_id: Parent entry, or None for roots
            status: Status filter
            search: Case-insensitive term over content and author name
            page: 1-based page number
            page_size: Entries per page (1..max_page_size)
            with_counts: Also return root counts per status

        Returns:
            The requested page
        """
        page = max(1, page)
        page_size = max(
            1,
            min(self.settings.max_page_size, page_size or self.settings.default_page_size),
        )
        search = search.strip() if search else None
        search = search or None

        with logfire.span(
            "entry_service.list_entries",
            parent_id=str(parent_id) if parent_id else None,
            status=status.value,
            page=page,
        ):
            entries = await self.entry_repository.find_page(
                parent_id=parent_id,
                status=status,
                search=search,
                limit=page_size,
                offset=(page - 1) * page_size,
            )
            total = await self.entry_repository.count(
                parent_id=parent_id, status=status, search=search
            )

            child_counts: dict[EntryId, int] = {}
            if parent_id is None and entries and status != StatusFilter.DELETED:
                child_counts = await self.entry_repository.count_active_children(
                    [e.id for e in entries]
                )

            root_counts = None
            if with_counts:
                root_counts = await self.entry_repository.count_roots_by_status()

            return EntryPage(
                entries=entries,
                total=total,
                page=page,
                page_size=page_size,
                child_counts=child_counts,
                root_counts=root_counts,
            )

    async def load_subtree(self, entry_id: EntryId) -> List[Entry]:
        """Load all descendants of an entry, breadth first.

        One store query per level. Deleted descendants are included so the
        tree keeps its shape; callers blank their content for display.
        Ids already seen are skipped, so corrupted parent links cannot loop.

        Args:
            entry_id: Subtree root (not included in the result)

        Returns:
            Descendants in level order, each level oldest first
        """
        with logfire.span("entry_service.load_subtree", entry_id=str(entry_id)):
            visited: set[EntryId] = {entry_id}
            frontier: List[EntryId] = [entry_id]
            result: List[Entry] = []

            while frontier:
                children = await self.entry_repository.find_children_of(frontier)
                frontier = []
                for child in children:
                    if child.id in visited:
                        continue
                    visited.add(child.id)
                    result.append(child)
                    frontier.append(child.id)

            logfire.debug("Subtree loaded", entry_id=str(entry_id), size=len(result))
            return result

    async def soft_delete(self, identity: Identity, entry_id: EntryId) -> Entry:
        """Soft delete an entry (owner or admin).

        Deleting an already deleted entry succeeds without further change.

        Raises:
            NotFoundError: If the entry does not exist
            ForbiddenError: If the caller neither owns the entry nor is admin
        """
        with logfire.span(
            "entry_service.soft_delete",
            entry_id=str(entry_id),
            identity_key=identity.key,
        ):
            entry = await self.get_entry(entry_id)

            if not (entry.is_owned_by(identity) or identity.is_admin):
                logfire.warn(
                    "Delete by non-owner",
                    entry_id=str(entry_id),
                    identity_key=identity.key,
                )
                raise ForbiddenError("Entry", str(entry_id), identity.key)

            if entry.is_deleted:
                return entry

            now = utcnow()
            update: dict = {
                "status": EntryStatus.DELETED,
                "deleted_at": now,
                "updated_at": now,
            }
            if self.settings.delete_policy == "blank":
                update["content"] = ""

            updated = await self.entry_repository.update(entry.model_copy(update=update))
            logfire.info(
                "Entry deleted",
                entry_id=str(entry_id),
                policy=self.settings.delete_policy,
                by_admin=not entry.is_owned_by(identity),
            )
            return updated

    async def restore(self, identity: Identity, entry_id: EntryId) -> Entry:
        """Un-hide a deleted entry (admin only).

        Under the ``blank`` delete policy the content stays empty.

        Raises:
            ForbiddenError: If the caller is not admin
            NotFoundError: If the entry does not exist
        """
        with logfire.span("entry_service.restore", entry_id=str(entry_id)):
            if not identity.is_admin:
                raise ForbiddenError("Entry", str(entry_id), identity.key)

            entry = await self.get_entry(entry_id)
            if not entry.is_deleted:
                return entry

            updated = await self.entry_repository.update(
                entry.model_copy(
                    update={
                        "status": EntryStatus.ACTIVE,
                        "deleted_at": None,
                        "updated_at": utcnow(),
                    }
                )
            )
            logfire.info("Entry restored", entry_id=str(entry_id))
            return updated

    async def list_by_author(self, identity: Identity, limit: int = 30) -> List[Entry]:
        """List the caller's own entries, newest first.

        Raises:
            UnauthenticatedError: If the caller is not signed in
        """
        if not identity.is_authenticated:
            raise UnauthenticatedError("list own entries")
        keys = [identity.visitor_key.root] if identity.visitor_key else []
        return await self.entry_repository.find_by_author(
            author_user_id=identity.user_id, author_keys=keys, limit=limit
        )

    async def display_name_for(self, entry: Entry) -> Optional[str]:
        """Live display name of an entry's author, else its snapshot."""
        if entry.author_user_id is not None:
            profile = await self.user_profile_repository.find_by_user_id(
                entry.author_user_id
            )
            if profile and profile.username:
                return profile.username
        return entry.author_name

    async def display_names(self, entries: List[Entry]) -> dict[EntryId, Optional[str]]:
        """Resolve live display names for a batch of entries (one query)."""
        user_ids = list({e.author_user_id for e in entries if e.author_user_id})
        profiles = (
            await self.user_profile_repository.find_by_user_ids(user_ids)
            if user_ids
            else []
        )
        names: dict[UserId, str] = {p.user_id: p.username for p in profiles if p.username}
        return {
            e.id: names.get(e.author_user_id, e.author_name)
            if e.author_user_id
            else e.author_name
            for e in entries
        }

    async def _resolve_author_name(
        self, identity: Identity, supplied: Optional[str]
    ) -> Optional[str]:
        supplied = self.content_policy.normalize_author_name(supplied)
        if not identity.is_authenticated:
            return supplied

        profile = await self.user_profile_repository.find_by_user_id(identity.user_id)
        if profile and profile.username:
            return profile.username
        return identity.display_name or supplied
