"""Moderation post presentation."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from guestbook.domain.model import ModerationPost
from guestbook.domain.value import PostSource


class PostAuthorView(BaseModel):
    user_id: Optional[str]
    name: Optional[str]
    email: Optional[str]


class ModerationPostView(BaseModel):
    """A post from any source, addressed by its global id."""

    id: str  # "<source>:<source_ref_id>"
    source: PostSource
    source_ref_id: str
    created_at: datetime
    author: PostAuthorView
    content: str
    parent_id: Optional[str]
    deleted: bool

    @classmethod
    def from_post(cls, post: ModerationPost) -> "ModerationPostView":
        return cls(
            id=str(post.global_id),
            source=post.source,
            source_ref_id=str(post.source_ref_id),
            created_at=post.created_at,
            author=PostAuthorView(
                user_id=str(post.author.user_id) if post.author.user_id else None,
                name=post.author.name,
                email=post.author.email,
            ),
            content=post.content,
            parent_id=str(post.parent_id) if post.parent_id else None,
            deleted=post.deleted,
        )
