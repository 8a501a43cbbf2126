"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from guestbook.domain.model import Entry
from guestbook.domain.value import (
    EntryId,
    EntryStatus,
    Identity,
    UserId,
    VisitorKey,
)

ADMIN_EMAIL = "admin@example.com"


def visitor(key: str | None = None) -> Identity:
    """Anonymous identity with a valid visitor key."""
    return Identity(visitor_key=VisitorKey(key or f"visitor-{uuid4().hex[:12]}"))


def member(
    user_id: UserId | None = None,
    visitor_key: str | None = None,
    email: str | None = None,
    display_name: str | None = None,
) -> Identity:
    """Signed-in identity."""
    return Identity(
        user_id=user_id or UserId(uuid4()),
        visitor_key=VisitorKey(visitor_key) if visitor_key else None,
        email=email,
        display_name=display_name,
    )


def admin() -> Identity:
    """Signed-in administrator."""
    return Identity(user_id=UserId(uuid4()), email=ADMIN_EMAIL, is_admin=True)


def make_entry(
    content: str = "hello",
    parent: Entry | None = None,
    author: Identity | None = None,
    status: EntryStatus = EntryStatus.ACTIVE,
    created_at: datetime | None = None,
    **fields,
) -> Entry:
    """Build an entry directly, bypassing validation and rate limits.

    Replies get ``root_id`` and ``depth`` from ``parent``; any other field
    can be overridden through keyword arguments.
    """
    entry_id = EntryId(uuid4())
    author = author or visitor()
    created_at = created_at or datetime.now(timezone.utc)
    values = {
        "id": entry_id,
        "root_id": parent.root_id if parent else entry_id,
        "parent_id": parent.id if parent else None,
        "depth": parent.depth + 1 if parent else 0,
        "author_user_id": author.user_id,
        "author_key": None if author.is_authenticated else author.key,
        "content": content,
        "status": status,
        "created_at": created_at,
        "updated_at": created_at,
        "deleted_at": created_at if status == EntryStatus.DELETED else None,
    }
    values.update(fields)
    return Entry(**values)


def minutes_ago(minutes: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(minutes=minutes)
