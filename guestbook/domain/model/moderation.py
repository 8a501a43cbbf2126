"""Moderation overlay models.

The overlay projects entries and chat messages into one post shape keyed by
a composite global id, and hides append-only records with tombstones.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from guestbook.domain.model.common import DomainModel, utcnow
from guestbook.domain.value import GlobalPostId, PostSource, UserId


class Tombstone(DomainModel):
    """Soft-delete marker for a record of an append-only source."""

    source: PostSource
    source_ref_id: UUID
    deleted_at: datetime = Field(default_factory=utcnow)


class PostAuthor(DomainModel):
    """Author as shown in the moderation view."""

    user_id: Optional[UserId] = None
    name: Optional[str] = None
    email: Optional[str] = None


class ModerationPost(DomainModel):
    """Read-only projection of a record from any source."""

    global_id: GlobalPostId
    created_at: datetime
    author: PostAuthor
    content: str
    parent_id: Optional[UUID] = None
    deleted: bool = False

    @property
    def source(self) -> PostSource:
        return self.global_id.source

    @property
    def source_ref_id(self) -> UUID:
        return self.global_id.source_ref_id


class AuthorPostGroup(DomainModel):
    """Per-identity summary row.

    ``group_key`` is the author's user id, or the visitor key for anonymous
    authors. ``reaction_count`` counts reactions given by that identity.
    """

    group_key: str
    active_count: int = 0
    deleted_count: int = 0
    reaction_count: int = 0
    name: Optional[str] = None
