"""Entry entity.

Entries are guestbook posts and their replies. They form a tree through
``parent_id`` with ``root_id`` and ``depth`` denormalized onto every row.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from guestbook.domain.model.common import DomainModel, utcnow
from guestbook.domain.value import (
    ContentType,
    EntryId,
    EntryStatus,
    Identity,
    UserId,
)


class Entry(DomainModel):
    """Entry entity.

    Threading is managed through:
    - parent_id: Direct parent entry (None for roots)
    - root_id: Topmost ancestor (own id for roots)
    - depth: Nesting level, 0 for roots, capped at the configured maximum

    Authorship is recorded as either ``author_user_id`` (authenticated) or
    ``author_key`` (anonymous visitor key). The ``reply_to_*`` fields
    snapshot the parent's author for the notifications reader.
    """

    id: EntryId
    root_id: EntryId
    parent_id: Optional[EntryId] = None
    depth: int = Field(default=0, ge=0)
    author_user_id: Optional[UserId] = None
    author_key: Optional[str] = None
    author_name: Optional[str] = None
    content: str
    content_type: ContentType = ContentType.PLAIN
    status: EntryStatus = EntryStatus.ACTIVE
    reply_to_user_id: Optional[UserId] = None
    reply_to_key: Optional[str] = None
    reply_to_name: Optional[str] = None
    origin: Optional[str] = None  # Network origin of the creating request
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    deleted_at: Optional[datetime] = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def is_deleted(self) -> bool:
        return self.status == EntryStatus.DELETED or self.deleted_at is not None

    def is_owned_by(self, identity: Identity | None) -> bool:
        """Check whether the identity authored this entry."""
        if identity is None:
            return False
        return identity.owns(self.author_user_id, self.author_key)

    def visible_content(self, viewer: Identity | None) -> str:
        """Content as served to ``viewer``.

        Deleted content is withheld from everyone but the author.
        """
        if self.is_deleted and not self.is_owned_by(viewer):
            return ""
        return self.content
