"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from guestbook.domain.model import (
    AuthorPostGroup,
    ChatMessage,
    Entry,
    Reaction,
    Tombstone,
    UserProfile,
)
from guestbook.domain.value import (
    ChatMessageId,
    ChatSessionId,
    ContentType,
    EntryId,
    EntryStatus,
    PostSource,
    ReactionValue,
    UserId,
)


def _uuid(value: Any) -> UUID | None:
    if value is None:
        return None
    return value if isinstance(value, UUID) else UUID(str(value))


def row_to_entry(row: Dict[str, Any]) -> Entry:
    """Convert database row to Entry domain model.

    Legacy rows may lack ``root_id``; a missing root id on a root entry is
    read as the entry's own id.

    Args:
        row: Database row as dict

    Returns:
        Entry domain model
    """
    entry_id = EntryId(_uuid(row["id"]))
    parent_id = _uuid(row.get("parent_id"))
    root_id = _uuid(row.get("root_id")) or (parent_id if parent_id else entry_id)
    author_user_id = _uuid(row.get("author_user_id"))
    reply_to_user_id = _uuid(row.get("reply_to_user_id"))
    return Entry(
        id=entry_id,
        root_id=EntryId(root_id),
        parent_id=EntryId(parent_id) if parent_id else None,
        depth=row.get("depth") or 0,
        author_user_id=UserId(author_user_id) if author_user_id else None,
        author_key=row.get("author_key"),
        author_name=row.get("author_name"),
        content=row.get("content") or "",
        content_type=ContentType(row.get("content_type") or "plain"),
        status=EntryStatus(row.get("status") or "active"),
        reply_to_user_id=UserId(reply_to_user_id) if reply_to_user_id else None,
        reply_to_key=row.get("reply_to_key"),
        reply_to_name=row.get("reply_to_name"),
        origin=row.get("origin"),
        created_at=row["created_at"],
        updated_at=row.get("updated_at") or row["created_at"],
        deleted_at=row.get("deleted_at"),
    )


def entry_to_dict(entry: Entry) -> Dict[str, Any]:
    """Convert Entry domain model to database dict.

    Args:
        entry: Entry domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = entry.model_dump()
    data["content_type"] = entry.content_type.value
    data["status"] = entry.status.value
    return data


def row_to_reaction(row: Dict[str, Any]) -> Reaction:
    """Convert database row to Reaction domain model."""
    return Reaction(
        entry_id=EntryId(_uuid(row["entry_id"])),
        identity_key=row["identity_key"],
        value=ReactionValue(row["value"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def reaction_to_dict(reaction: Reaction) -> Dict[str, Any]:
    """Convert Reaction domain model to database dict."""
    data = reaction.model_dump()
    data["value"] = int(reaction.value)
    return data


def row_to_chat_message(row: Dict[str, Any]) -> ChatMessage:
    """Convert a chat message row (joined with its session) to ChatMessage."""
    user_id = _uuid(row.get("user_id"))
    return ChatMessage(
        id=ChatMessageId(_uuid(row["id"])),
        session_id=ChatSessionId(_uuid(row["session_id"])),
        user_id=UserId(user_id) if user_id else None,
        role=row["role"],
        content=row["content"],
        model=row.get("model"),
        created_at=row["created_at"],
    )


def row_to_tombstone(row: Dict[str, Any]) -> Tombstone:
    """Convert database row to Tombstone domain model."""
    return Tombstone(
        source=PostSource(row["source"]),
        source_ref_id=_uuid(row["source_ref_id"]),
        deleted_at=row["deleted_at"],
    )


def tombstone_to_dict(tombstone: Tombstone) -> Dict[str, Any]:
    """Convert Tombstone domain model to database dict."""
    return {
        "source": tombstone.source.value,
        "source_ref_id": tombstone.source_ref_id,
        "deleted_at": tombstone.deleted_at,
    }


def row_to_user_profile(row: Dict[str, Any]) -> UserProfile:
    """Convert database row to UserProfile domain model."""
    return UserProfile(
        user_id=UserId(_uuid(row["user_id"])),
        username=row.get("username"),
        email=row.get("email"),
    )


def row_to_author_group(row: Dict[str, Any]) -> AuthorPostGroup:
    """Convert a summary view row to AuthorPostGroup."""
    return AuthorPostGroup(
        group_key=str(row["group_key"]),
        active_count=row.get("active_count") or 0,
        deleted_count=row.get("deleted_count") or 0,
        reaction_count=row.get("reaction_count") or 0,
    )
