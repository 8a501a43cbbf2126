"""SQLAlchemy table definitions for the guestbook.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    SmallInteger,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# GUESTBOOK ENTRIES TABLE (threaded posts)
# ============================================================================
entries_table = Table(
    "guestbook_entries",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    # Threading
    Column(
        "parent_id",
        UUID(as_uuid=True),
        ForeignKey("guestbook_entries.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("root_id", UUID(as_uuid=True), nullable=True),  # Own id for roots
    Column("depth", Integer, nullable=False, server_default="0"),
    # Authorship: user id (authenticated) or visitor key (anonymous)
    Column("author_user_id", UUID(as_uuid=True), nullable=True),
    Column("author_key", String(80), nullable=True),
    Column("author_name", String(40), nullable=True),  # Snapshot at post time
    # Content
    Column("content", Text, nullable=False, server_default=""),
    Column("content_type", String(10), nullable=False, server_default="plain"),
    # Lifecycle
    Column("status", String(20), nullable=False, server_default="active"),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    # Reply target snapshot (for the notifications reader)
    Column("reply_to_user_id", UUID(as_uuid=True), nullable=True),
    Column("reply_to_key", String(80), nullable=True),
    Column("reply_to_name", String(40), nullable=True),
    Column("origin", String(64), nullable=True),  # Client address, rate limiting
    CheckConstraint("content_type IN ('plain', 'md')", name="ck_entries_content_type"),
    CheckConstraint("status IN ('active', 'deleted')", name="ck_entries_status"),
    CheckConstraint("depth >= 0", name="ck_entries_depth"),
)

Index(
    "idx_entries_parent_created",
    entries_table.c.parent_id,
    entries_table.c.created_at,
)
Index("idx_entries_root_id", entries_table.c.root_id)
Index(
    "idx_entries_author_user_created",
    entries_table.c.author_user_id,
    entries_table.c.created_at,
)
Index(
    "idx_entries_author_key_created",
    entries_table.c.author_key,
    entries_table.c.created_at,
)
Index("idx_entries_origin_created", entries_table.c.origin, entries_table.c.created_at)
Index("idx_entries_status_created", entries_table.c.status, entries_table.c.created_at)

# ============================================================================
# GUESTBOOK REACTIONS TABLE (one row per entry and identity key)
# ============================================================================
reactions_table = Table(
    "guestbook_reactions",
    metadata,
    Column(
        "entry_id",
        UUID(as_uuid=True),
        ForeignKey("guestbook_entries.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("identity_key", String(80), nullable=False),
    Column("value", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("entry_id", "identity_key", name="pk_guestbook_reactions"),
    CheckConstraint("value IN (1, -1)", name="ck_reactions_value"),
)

Index("idx_reactions_identity_key", reactions_table.c.identity_key)

# ============================================================================
# CHAT TRANSCRIPTS (written by the chat relay, read-only here)
# ============================================================================
chat_sessions_table = Table(
    "chat_sessions",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("user_id", UUID(as_uuid=True), nullable=True),
    Column("title", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

chat_messages_table = Table(
    "chat_messages",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "session_id",
        UUID(as_uuid=True),
        ForeignKey("chat_sessions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("role", String(20), nullable=False),
    Column("content", Text, nullable=False),
    Column("model", String(100), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_chat_messages_created", chat_messages_table.c.created_at.desc()
)
Index("idx_chat_messages_session_id", chat_messages_table.c.session_id)

# ============================================================================
# ADMIN POST TOMBSTONES (soft delete for append-only sources)
# ============================================================================
tombstones_table = Table(
    "admin_post_tombstones",
    metadata,
    Column("source", String(20), nullable=False),
    Column("source_ref_id", UUID(as_uuid=True), nullable=False),
    Column(
        "deleted_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("source", "source_ref_id", name="pk_admin_post_tombstones"),
)

# ============================================================================
# USER PROFILES (live display names)
# ============================================================================
user_profiles_table = Table(
    "user_profiles",
    metadata,
    Column("user_id", UUID(as_uuid=True), primary_key=True),
    Column("username", String(40), nullable=True),
    Column("username_lower", String(40), nullable=True, unique=True),
    Column("email", String(255), nullable=True),
)

# ============================================================================
# ADMIN POST USER GROUPS (view, see migrations)
# ============================================================================
# Declared as a table for querying only; it is never created from metadata.
author_groups_view = Table(
    "admin_post_user_groups",
    MetaData(),
    Column("group_key", Text, primary_key=True),
    Column("active_count", Integer),
    Column("deleted_count", Integer),
    Column("reaction_count", Integer),
)
