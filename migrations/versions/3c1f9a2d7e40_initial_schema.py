"""initial_schema

Create the forum schema:
- Users (local password or OpenID, role flags, invite ledger, counter caches)
- Invites (emailed, token based, expiring)
- Messages (private, per-side soft deletion)
- Discussions and posts
- Discussion relationships (following/favorite/participated)
- Discussion views (read position)

Revision ID: 3c1f9a2d7e40
Revises:
Create Date: 2026-10-19 09:12:44.318220

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f9a2d7e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp_column(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=False),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _id_column(),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("realname", sa.String(255), nullable=True),
        sa.Column("application", sa.Text(), nullable=True),  # Signup justification
        sa.Column("hashed_password", sa.String(255), nullable=True),
        sa.Column("openid_url", sa.String(1024), nullable=True),
        sa.Column("admin", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("trusted", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("moderator", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("user_admin", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("banned", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("activated", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "available_invites", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column("inviter_id", sa.UUID(), nullable=True),
        sa.Column("posts_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "discussions_count", sa.Integer(), nullable=False, server_default="0"
        ),
        sa.Column("last_active", sa.TIMESTAMP(timezone=False), nullable=True),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.ForeignKeyConstraint(["inviter_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("openid_url", name="uq_users_openid_url"),
        sa.CheckConstraint(
            "available_invites >= 0", name="ck_users_available_invites"
        ),
    )
    op.create_index("idx_users_inviter_id", "users", ["inviter_id"])
    op.create_index("idx_users_last_active", "users", ["last_active"])
    op.create_index("idx_users_created_at", "users", ["created_at"])

    # ========================================================================
    # INVITES table
    # ========================================================================
    op.create_table(
        "invites",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),  # Inviter
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=False), nullable=False),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token", name="uq_invites_token"),
    )
    op.create_index("idx_invites_user_id", "invites", ["user_id"])

    # ========================================================================
    # MESSAGES table
    # ========================================================================
    op.create_table(
        "messages",
        _id_column(),
        sa.Column("sender_id", sa.UUID(), nullable=False),
        sa.Column("recipient_id", sa.UUID(), nullable=False),
        sa.Column("subject", sa.String(255), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("deleted", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "deleted_by_sender", sa.Boolean(), nullable=False, server_default="false"
        ),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["recipient_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_messages_recipient", "messages", ["recipient_id", "read", "deleted"]
    )
    op.create_index("idx_messages_sender", "messages", ["sender_id"])
    op.create_index("idx_messages_created_at", "messages", ["created_at"])

    # ========================================================================
    # DISCUSSIONS table
    # ========================================================================
    op.create_table(
        "discussions",
        _id_column(),
        sa.Column("poster_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("trusted", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("sticky", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp_column("last_post_at"),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["poster_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_discussions_poster_id", "discussions", ["poster_id"])
    op.create_index(
        "idx_discussions_sticky_last_post",
        "discussions",
        [sa.text("sticky DESC"), sa.text("last_post_at DESC")],
    )

    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("discussion_id", sa.UUID(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("trusted", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(
            ["discussion_id"], ["discussions.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_posts_user_id_created_at", "posts", ["user_id", "created_at"]
    )
    op.create_index("idx_posts_discussion_id", "posts", ["discussion_id"])

    # ========================================================================
    # DISCUSSION_RELATIONSHIPS table
    # ========================================================================
    op.create_table(
        "discussion_relationships",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("discussion_id", sa.UUID(), nullable=False),
        sa.Column("following", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("favorite", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "participated", sa.Boolean(), nullable=False, server_default="false"
        ),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["discussion_id"], ["discussions.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id",
            "discussion_id",
            name="uq_discussion_relationships_user_discussion",
        ),
    )

    # ========================================================================
    # DISCUSSION_VIEWS table
    # ========================================================================
    op.create_table(
        "discussion_views",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("discussion_id", sa.UUID(), nullable=False),
        sa.Column("post_index", sa.Integer(), nullable=False, server_default="0"),
        _timestamp_column("updated_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["discussion_id"], ["discussions.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "discussion_id", name="uq_discussion_views_user_discussion"
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("discussion_views")
    op.drop_table("discussion_relationships")
    op.drop_table("posts")
    op.drop_table("discussions")
    op.drop_table("messages")
    op.drop_table("invites")
    op.drop_table("users")
