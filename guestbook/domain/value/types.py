"""Domain value objects for the guestbook.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum, IntEnum
from uuid import UUID

from pydantic import field_validator

from guestbook.domain.error import ValidationError
from guestbook.domain.value.common import RootValueObject, ValueObject

_VISITOR_KEY_RE = re.compile(r"^[A-Za-z0-9_-]{8,80}$")


class EntryStatus(str, Enum):
    """Lifecycle status of an entry."""

    ACTIVE = "active"
    DELETED = "deleted"


class StatusFilter(str, Enum):
    """Status filter accepted by entry listings."""

    ACTIVE = "active"
    DELETED = "deleted"
    ALL = "all"


class ContentType(str, Enum):
    """Format of entry content."""

    PLAIN = "plain"
    MARKDOWN = "md"


class ReactionValue(IntEnum):
    """A reaction on an entry.

    Stored as +1 / -1 so "no reaction" can be reported as 0.
    """

    LIKE = 1
    DISLIKE = -1

    @classmethod
    def parse(cls, raw: "str | int") -> "ReactionValue | None":
        """Parse a client value.

        Accepts ``"like"``, ``"dislike"``, ``1``, ``-1`` and ``0`` (numbers
        may also arrive as strings).
        Returns None for ``0`` (meaning: clear the reaction).

        Raises:
            ValidationError: If the value is not recognised
        """
        if isinstance(raw, str):
            raw = raw.strip().lower()
            if raw in ("1", "-1", "0"):
                raw = int(raw)
        if raw in ("like", 1):
            return cls.LIKE
        if raw in ("dislike", -1):
            return cls.DISLIKE
        if raw == 0:
            return None
        raise ValidationError(f"Invalid reaction value: {raw!r}")


class PostSource(str, Enum):
    """Origin source of a moderation post."""

    FEEDBACK = "feedback"  # guestbook entries (mutable)
    CHAT = "chat"  # chat transcripts (append-only)


class VisitorKey(RootValueObject[str]):
    """Client-held anonymous identity token.

    8-80 characters from ``[A-Za-z0-9_-]``, surrounding whitespace ignored.
    """

    @field_validator("root")
    @classmethod
    def validate_visitor_key(cls, v: str) -> str:
        """Validate visitor key format."""
        v = v.strip()
        if not _VISITOR_KEY_RE.match(v):
            raise ValueError(
                "Visitor key must be 8-80 characters of letters, digits, '_' or '-'"
            )
        return v


class GlobalPostId(ValueObject):
    """Composite moderation id ``"<source>:<source_ref_id>"``."""

    source: PostSource
    source_ref_id: UUID

    @classmethod
    def parse(cls, raw: str) -> "GlobalPostId":
        """Parse a serialized global id.

        A bare UUID without prefix is read as a feedback entry id.

        Raises:
            ValidationError: If the id is malformed or the source unknown
        """
        raw = raw.strip()
        source_part, sep, ref_part = raw.partition(":")
        if not sep:
            source_part, ref_part = PostSource.FEEDBACK.value, raw
        try:
            source = PostSource(source_part)
            ref = UUID(ref_part)
        except ValueError:
            raise ValidationError(f"Invalid post id: {raw}")
        return cls(source=source, source_ref_id=ref)

    def __str__(self) -> str:
        return f"{self.source.value}:{self.source_ref_id}"
