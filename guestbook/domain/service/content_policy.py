"""Content validation rules for new entries."""

import re

import logfire

from guestbook.config import GuestbookSettings
from guestbook.domain.error import ValidationError
from guestbook.domain.value import ContentType

from .base import Service

_LINK_RE = re.compile(r"https?://|www\.", re.IGNORECASE)


class ContentPolicy(Service):
    """Length limits and the link-count abuse heuristic."""

    def __init__(self, settings: GuestbookSettings) -> None:
        self.settings = settings

    def max_length(self, content_type: ContentType) -> int:
        if content_type == ContentType.MARKDOWN:
            return self.settings.max_markdown_length
        return self.settings.max_plain_length

    def normalize_content(self, content: str, content_type: ContentType) -> str:
        """Trim content and enforce length and link limits.

        Args:
            content: Raw content as submitted
            content_type: Declared format

        Returns:
            Trimmed content

        Raises:
            ValidationError: If content is empty, too long or has too many links
        """
        content = (content or "").strip()
        if not content:
            raise ValidationError("Content is required")

        limit = self.max_length(content_type)
        if len(content) > limit:
            raise ValidationError(f"Content must be at most {limit} characters")

        links = count_links(content)
        if links > self.settings.max_links:
            logfire.warn("Entry rejected for link count", links=links)
            raise ValidationError(
                f"Content may contain at most {self.settings.max_links} links"
            )

        return content

    def normalize_author_name(self, name: str | None) -> str | None:
        """Trim a supplied display name; blank names become None.

        Raises:
            ValidationError: If the name is too long
        """
        if name is None:
            return None
        name = name.strip()
        if not name:
            return None
        if len(name) > self.settings.max_author_name_length:
            raise ValidationError(
                f"Name must be at most {self.settings.max_author_name_length} characters"
            )
        return name


def count_links(content: str) -> int:
    """Count ``http://``, ``https://`` and ``www.`` occurrences."""
    return len(_LINK_RE.findall(content))
