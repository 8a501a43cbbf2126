"""Reaction entity.

At most one reaction exists per (entry, identity key). Removing the row is
the same as having no reaction.
"""

from datetime import datetime

from pydantic import Field

from guestbook.domain.model.common import DomainModel, utcnow
from guestbook.domain.value import EntryId, ReactionValue


class Reaction(DomainModel):
    """Like/dislike on an entry by one identity."""

    entry_id: EntryId
    identity_key: str  # User id string or visitor key
    value: ReactionValue
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class ReactionStats(DomainModel):
    """Aggregate reaction counts for one entry, personalised to a viewer."""

    like: int = 0
    dislike: int = 0
    my_reaction: int = 0  # 1, -1 or 0
