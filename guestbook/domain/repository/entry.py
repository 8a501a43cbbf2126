"""Entry repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from guestbook.domain.model.entry import Entry
from guestbook.domain.value import EntryId, EntryStatus, StatusFilter, UserId


class EntryRepository(ABC):
    """Repository for Entry aggregate.

    Defines the contract for entry persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, entry_id: EntryId) -> Optional[Entry]:
        """Find an entry by ID, regardless of status.

        Args:
            entry_id: The entry's unique identifier

        Returns:
            The entry if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, entry_ids: Sequence[EntryId]) -> List[Entry]:
        """Find several entries by ID (batch query)."""
        pass

    @abstractmethod
    async def find_page(
        self,
        parent_id: Optional[EntryId] = None,
        status: StatusFilter = StatusFilter.ACTIVE,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Entry]:
        """Find one page of roots or of direct children.

        Roots (``parent_id`` None) are ordered newest first, children
        oldest first. ``search`` matches content or author name
        case-insensitively; for ``StatusFilter.DELETED`` only the author
        name is searched since deleted content may be blank.

        Args:
            parent_id: Parent entry, or None to list roots
            status: Status filter
            search: Optional search term
            limit: Maximum number of entries to return
            offset: Number of entries to skip

        Returns:
            List of entries
        """
        pass

    @abstractmethod
    async def count(
        self,
        parent_id: Optional[EntryId] = None,
        status: StatusFilter = StatusFilter.ACTIVE,
        search: Optional[str] = None,
    ) -> int:
        """Count entries matching the same filters as ``find_page``."""
        pass

    @abstractmethod
    async def count_roots_by_status(self) -> dict[EntryStatus, int]:
        """Count root entries per status.

        Returns:
            Mapping with a count for every ``EntryStatus``
        """
        pass

    @abstractmethod
    async def count_active_children(
        self, parent_ids: Sequence[EntryId]
    ) -> dict[EntryId, int]:
        """Count active direct children for each given parent.

        Returns:
            Mapping of parent id to child count (0 for parents without any)
        """
        pass

    @abstractmethod
    async def find_children_of(self, parent_ids: Sequence[EntryId]) -> List[Entry]:
        """Find direct children of all given parents, any status.

        Used to load a subtree one level per query.

        Returns:
            Children ordered oldest first
        """
        pass

    @abstractmethod
    async def find_by_author(
        self,
        author_user_id: Optional[UserId] = None,
        author_keys: Sequence[str] = (),
        limit: int = 30,
    ) -> List[Entry]:
        """Find entries written under a user id or any of the given keys.

        Returns:
            Entries ordered newest first
        """
        pass

    @abstractmethod
    async def count_created_since(
        self,
        since: datetime,
        author_user_id: Optional[UserId] = None,
        author_keys: Sequence[str] = (),
        origin: Optional[str] = None,
    ) -> int:
        """Count entries created at or after ``since`` by one author or origin.

        The author filters match either the user id or any of the visitor
        keys. Given together with ``origin``, both must match.
        """
        pass

    @abstractmethod
    async def find_for_moderation(
        self,
        q: Optional[str] = None,
        author_user_id: Optional[UserId] = None,
        anonymous_only: bool = False,
        limit: int = 30,
    ) -> List[Entry]:
        """Find active entries for the moderation listing, newest first.

        Args:
            q: Case-insensitive content filter
            author_user_id: Restrict to one authenticated author
            anonymous_only: Restrict to entries without an author user id
            limit: Maximum number of entries to return
        """
        pass

    @abstractmethod
    async def count_for_moderation(
        self,
        q: Optional[str] = None,
        author_user_id: Optional[UserId] = None,
        anonymous_only: bool = False,
    ) -> int:
        """Count entries matching the same filters as ``find_for_moderation``."""
        pass

    @abstractmethod
    async def find_deleted_ids(self, limit: int) -> set[EntryId]:
        """Fetch ids of deleted entries, at most ``limit`` of them."""
        pass

    @abstractmethod
    async def save(self, entry: Entry) -> Entry:
        """Insert a new entry.

        Args:
            entry: The entry to save

        Returns:
            The saved entry
        """
        pass

    @abstractmethod
    async def update(self, entry: Entry) -> Entry:
        """Persist changes to an existing entry's mutable fields.

        Args:
            entry: The entry carrying updated status/content/timestamps

        Returns:
            The updated entry
        """
        pass
