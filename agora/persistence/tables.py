"""SQLAlchemy table definitions for Agora.

These table definitions back the Core queries in the repositories.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("username", String(255), nullable=False, unique=True),
    Column("email", String(255), nullable=False),
    Column("realname", String(255), nullable=True),
    Column("application", Text, nullable=True),
    Column("hashed_password", String(255), nullable=True),
    Column("openid_url", String(1024), nullable=True, unique=True),
    Column("admin", Boolean, nullable=False, server_default="false"),
    Column("trusted", Boolean, nullable=False, server_default="false"),
    Column("moderator", Boolean, nullable=False, server_default="false"),
    Column("user_admin", Boolean, nullable=False, server_default="false"),
    Column("banned", Boolean, nullable=False, server_default="false"),
    Column("activated", Boolean, nullable=False, server_default="false"),
    Column("available_invites", Integer, nullable=False, server_default="0"),
    Column(
        "inviter_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("posts_count", Integer, nullable=False, server_default="0"),
    Column("discussions_count", Integer, nullable=False, server_default="0"),
    Column("last_active", TIMESTAMP(timezone=False), nullable=True),
    Column("created_at", TIMESTAMP(timezone=False), nullable=False),
    Column("updated_at", TIMESTAMP(timezone=False), nullable=False),
    CheckConstraint("available_invites >= 0", name="ck_users_available_invites"),
)

Index("idx_users_inviter_id", users_table.c.inviter_id)
Index("idx_users_last_active", users_table.c.last_active)
Index("idx_users_created_at", users_table.c.created_at)

# ============================================================================
# INVITES TABLE
# ============================================================================
invites_table = Table(
    "invites",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("email", String(255), nullable=False),
    Column("token", String(255), nullable=False, unique=True),
    Column("message", Text, nullable=True),
    Column("expires_at", TIMESTAMP(timezone=False), nullable=False),
    Column("created_at", TIMESTAMP(timezone=False), nullable=False),
)

Index("idx_invites_user_id", invites_table.c.user_id)

# ============================================================================
# MESSAGES TABLE
# ============================================================================
messages_table = Table(
    "messages",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("sender_id", UUID(as_uuid=True), ForeignKey("users.id"), nullable=False),
    Column(
        "recipient_id", UUID(as_uuid=True), ForeignKey("users.id"), nullable=False
    ),
    Column("subject", String(255), nullable=True),
    Column("body", Text, nullable=False),
    Column("read", Boolean, nullable=False, server_default="false"),
    Column("deleted", Boolean, nullable=False, server_default="false"),
    Column("deleted_by_sender", Boolean, nullable=False, server_default="false"),
    Column("created_at", TIMESTAMP(timezone=False), nullable=False),
)

Index(
    "idx_messages_recipient",
    messages_table.c.recipient_id,
    messages_table.c.read,
    messages_table.c.deleted,
)
Index("idx_messages_sender", messages_table.c.sender_id)
Index("idx_messages_created_at", messages_table.c.created_at)

# ============================================================================
# DISCUSSIONS TABLE
# ============================================================================
discussions_table = Table(
    "discussions",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("poster_id", UUID(as_uuid=True), ForeignKey("users.id"), nullable=False),
    Column("title", String(255), nullable=False),
    Column("trusted", Boolean, nullable=False, server_default="false"),
    Column("sticky", Boolean, nullable=False, server_default="false"),
    Column("last_post_at", TIMESTAMP(timezone=False), nullable=False),
    Column("created_at", TIMESTAMP(timezone=False), nullable=False),
)

Index("idx_discussions_poster_id", discussions_table.c.poster_id)
Index(
    "idx_discussions_sticky_last_post",
    discussions_table.c.sticky.desc(),
    discussions_table.c.last_post_at.desc(),
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("user_id", UUID(as_uuid=True), ForeignKey("users.id"), nullable=False),
    Column(
        "discussion_id",
        UUID(as_uuid=True),
        ForeignKey("discussions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("body", Text, nullable=False),
    Column("trusted", Boolean, nullable=False, server_default="false"),
    Column("created_at", TIMESTAMP(timezone=False), nullable=False),
)

Index("idx_posts_user_id_created_at", posts_table.c.user_id, posts_table.c.created_at)
Index("idx_posts_discussion_id", posts_table.c.discussion_id)

# ============================================================================
# DISCUSSION RELATIONSHIPS TABLE
# ============================================================================
discussion_relationships_table = Table(
    "discussion_relationships",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "discussion_id",
        UUID(as_uuid=True),
        ForeignKey("discussions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("following", Boolean, nullable=False, server_default="false"),
    Column("favorite", Boolean, nullable=False, server_default="false"),
    Column("participated", Boolean, nullable=False, server_default="false"),
    Column("created_at", TIMESTAMP(timezone=False), nullable=False),
    UniqueConstraint(
        "user_id", "discussion_id", name="uq_discussion_relationships_user_discussion"
    ),
)

# ============================================================================
# DISCUSSION VIEWS TABLE
# ============================================================================
discussion_views_table = Table(
    "discussion_views",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "discussion_id",
        UUID(as_uuid=True),
        ForeignKey("discussions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("post_index", Integer, nullable=False, server_default="0"),
    Column("updated_at", TIMESTAMP(timezone=False), nullable=False),
    UniqueConstraint(
        "user_id", "discussion_id", name="uq_discussion_views_user_discussion"
    ),
)
