"""Entry presentation shared by the entry use cases."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from guestbook.domain.model import Entry, ReactionStats
from guestbook.domain.service import EntryService, ReactionService
from guestbook.domain.value import ContentType, EntryId, EntryStatus, Identity


class ReactionStatsView(BaseModel):
    """Reaction counts as returned to clients."""

    like: int = 0
    dislike: int = 0
    my_reaction: int = 0

    @classmethod
    def from_stats(cls, stats: Optional[ReactionStats]) -> "ReactionStatsView":
        if stats is None:
            return cls()
        return cls(
            like=stats.like, dislike=stats.dislike, my_reaction=stats.my_reaction
        )


class EntryView(BaseModel):
    """Entry personalised for one viewer.

    Content of deleted entries is only returned to their author.
    """

    id: str
    root_id: str
    parent_id: Optional[str]
    depth: int
    author_name: Optional[str]
    content: str
    content_type: ContentType
    status: EntryStatus
    reply_to_name: Optional[str]
    created_at: datetime
    deleted_at: Optional[datetime]
    mine: bool
    stats: ReactionStatsView
    comment_count: Optional[int] = None


async def build_entry_views(
    entries: List[Entry],
    viewer: Optional[Identity],
    entry_service: EntryService,
    reaction_service: ReactionService,
    child_counts: Optional[dict[EntryId, int]] = None,
) -> List[EntryView]:
    """Annotate entries with live names, reaction stats and ownership.

    Names and stats are fetched in one batch each.
    """
    if not entries:
        return []

    names = await entry_service.display_names(entries)
    stats = await reaction_service.get_aggregate([e.id for e in entries], viewer)

    return [
        EntryView(
            id=str(e.id),
            root_id=str(e.root_id),
            parent_id=str(e.parent_id) if e.parent_id else None,
            depth=e.depth,
            author_name=names.get(e.id),
            content=e.visible_content(viewer),
            content_type=e.content_type,
            status=e.status,
            reply_to_name=e.reply_to_name,
            created_at=e.created_at,
            deleted_at=e.deleted_at,
            mine=e.is_owned_by(viewer),
            stats=ReactionStatsView.from_stats(stats.get(e.id)),
            comment_count=(
                child_counts.get(e.id, 0) if child_counts is not None else None
            ),
        )
        for e in entries
    ]
