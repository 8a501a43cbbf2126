"""Unit tests for row mappers."""

from datetime import datetime, timezone
from uuid import uuid4

from guestbook.domain.value import ContentType, EntryStatus
from guestbook.persistence.mappers import entry_to_dict, row_to_entry
from tests.conftest import make_entry


class TestEntryMapper:
    """Tests for the entry row mapper."""

    def test_legacy_root_without_root_id_is_its_own_root(self):
        entry_id = uuid4()
        created = datetime(2024, 1, 1, tzinfo=timezone.utc)

        entry = row_to_entry(
            {
                "id": str(entry_id),
                "parent_id": None,
                "root_id": None,
                "content": "legacy",
                "created_at": created,
            }
        )

        assert entry.root_id == entry_id
        assert entry.depth == 0
        assert entry.status == EntryStatus.ACTIVE
        assert entry.content_type == ContentType.PLAIN
        assert entry.updated_at == created

    def test_dict_round_trip(self):
        original = make_entry("hello", author_name="Ada")

        restored = row_to_entry(entry_to_dict(original))

        assert restored == original
