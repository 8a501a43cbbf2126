"""initial_schema

Create the guestbook schema:
- Guestbook entries (threaded, soft-deletable)
- Guestbook reactions (one like/dislike per entry and identity)
- Chat sessions and messages (written by the chat relay)
- Admin post tombstones (hide append-only chat messages)
- User profiles (live display names)
- admin_post_user_groups view (per-identity moderation summary)

Revision ID: 3c1d7e52a9f4
Revises:
Create Date: 2026-10-12 14:05:11.482913

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1d7e52a9f4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # GUESTBOOK_ENTRIES table
    # ========================================================================
    op.create_table(
        "guestbook_entries",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("root_id", sa.UUID(), nullable=True),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("author_user_id", sa.UUID(), nullable=True),
        sa.Column("author_key", sa.String(80), nullable=True),
        sa.Column("author_name", sa.String(40), nullable=True),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("content_type", sa.String(10), nullable=False, server_default="plain"),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("reply_to_user_id", sa.UUID(), nullable=True),
        sa.Column("reply_to_key", sa.String(80), nullable=True),
        sa.Column("reply_to_name", sa.String(40), nullable=True),
        sa.Column("origin", sa.String(64), nullable=True),
        sa.ForeignKeyConstraint(
            ["parent_id"], ["guestbook_entries.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "content_type IN ('plain', 'md')", name="ck_entries_content_type"
        ),
        sa.CheckConstraint("status IN ('active', 'deleted')", name="ck_entries_status"),
        sa.CheckConstraint("depth >= 0", name="ck_entries_depth"),
    )
    op.create_index(
        "idx_entries_parent_created", "guestbook_entries", ["parent_id", "created_at"]
    )
    op.create_index("idx_entries_root_id", "guestbook_entries", ["root_id"])
    op.create_index(
        "idx_entries_author_user_created",
        "guestbook_entries",
        ["author_user_id", "created_at"],
    )
    op.create_index(
        "idx_entries_author_key_created",
        "guestbook_entries",
        ["author_key", "created_at"],
    )
    op.create_index(
        "idx_entries_origin_created", "guestbook_entries", ["origin", "created_at"]
    )
    op.create_index(
        "idx_entries_status_created", "guestbook_entries", ["status", "created_at"]
    )

    # ========================================================================
    # GUESTBOOK_REACTIONS table
    # ========================================================================
    op.create_table(
        "guestbook_reactions",
        sa.Column("entry_id", sa.UUID(), nullable=False),
        sa.Column("identity_key", sa.String(80), nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["entry_id"], ["guestbook_entries.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint(
            "entry_id", "identity_key", name="pk_guestbook_reactions"
        ),
        sa.CheckConstraint("value IN (1, -1)", name="ck_reactions_value"),
    )
    op.create_index(
        "idx_reactions_identity_key", "guestbook_reactions", ["identity_key"]
    )

    # ========================================================================
    # CHAT_SESSIONS / CHAT_MESSAGES tables
    # ========================================================================
    op.create_table(
        "chat_sessions",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "chat_messages",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("session_id", sa.UUID(), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("model", sa.String(100), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(
            ["session_id"], ["chat_sessions.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_chat_messages_created",
        "chat_messages",
        [sa.text("created_at DESC")],
    )
    op.create_index("idx_chat_messages_session_id", "chat_messages", ["session_id"])

    # ========================================================================
    # ADMIN_POST_TOMBSTONES table
    # ========================================================================
    op.create_table(
        "admin_post_tombstones",
        sa.Column("source", sa.String(20), nullable=False),
        sa.Column("source_ref_id", sa.UUID(), nullable=False),
        sa.Column(
            "deleted_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint(
            "source", "source_ref_id", name="pk_admin_post_tombstones"
        ),
    )

    # ========================================================================
    # USER_PROFILES table
    # ========================================================================
    op.create_table(
        "user_profiles",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("username", sa.String(40), nullable=True),
        sa.Column("username_lower", sa.String(40), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint("username_lower", name="uq_user_profiles_username_lower"),
    )

    # ========================================================================
    # ADMIN_POST_USER_GROUPS view
    # ========================================================================
    # One row per author identity: the user id when signed in, else the
    # visitor key. Reactions are counted under the identity that gave them.
    op.execute("""
        CREATE OR REPLACE VIEW admin_post_user_groups AS
        WITH posts AS (
            SELECT
                COALESCE(author_user_id::text, author_key) AS group_key,
                COUNT(*) FILTER (
                    WHERE status = 'active' AND deleted_at IS NULL
                ) AS active_count,
                COUNT(*) FILTER (
                    WHERE status = 'deleted' OR deleted_at IS NOT NULL
                ) AS deleted_count
            FROM guestbook_entries
            WHERE COALESCE(author_user_id::text, author_key) IS NOT NULL
            GROUP BY 1
        ),
        reactions AS (
            SELECT identity_key AS group_key, COUNT(*) AS reaction_count
            FROM guestbook_reactions
            GROUP BY 1
        )
        SELECT
            COALESCE(p.group_key, r.group_key) AS group_key,
            COALESCE(p.active_count, 0)::int AS active_count,
            COALESCE(p.deleted_count, 0)::int AS deleted_count,
            COALESCE(r.reaction_count, 0)::int AS reaction_count
        FROM posts p
        FULL OUTER JOIN reactions r ON r.group_key = p.group_key
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP VIEW IF EXISTS admin_post_user_groups")
    op.drop_table("user_profiles")
    op.drop_table("admin_post_tombstones")
    op.drop_index("idx_chat_messages_session_id", table_name="chat_messages")
    op.drop_index("idx_chat_messages_created", table_name="chat_messages")
    op.drop_table("chat_messages")
    op.drop_table("chat_sessions")
    op.drop_index("idx_reactions_identity_key", table_name="guestbook_reactions")
    op.drop_table("guestbook_reactions")
    for index in (
        "idx_entries_status_created",
        "idx_entries_origin_created",
        "idx_entries_author_key_created",
        "idx_entries_author_user_created",
        "idx_entries_root_id",
        "idx_entries_parent_created",
    ):
        op.drop_index(index, table_name="guestbook_entries")
    op.drop_table("guestbook_entries")
