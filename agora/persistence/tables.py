"""SQLAlchemy table definitions for Agora.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("community_id", UUID, nullable=False),
    Column("author_id", UUID, nullable=False),
    Column("title", String(120), nullable=False),
    Column("body", Text, nullable=False),
    Column("created_at", TIMESTAMP, nullable=False, server_default="NOW()"),
    Column("updated_at", TIMESTAMP, nullable=False, server_default="NOW()"),
    Column("deleted_at", TIMESTAMP, nullable=True),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc(), posts_table.c.id.desc())
Index("idx_posts_community_id", posts_table.c.community_id)
Index("idx_posts_author_id", posts_table.c.author_id)

# ============================================================================
# COMMENTS TABLE (threaded via parent_id)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("author_id", UUID, nullable=False),
    Column("parent_id", UUID, ForeignKey("comments.id"), nullable=True),
    Column("depth", Integer, nullable=False, server_default="0"),
    Column("text", Text, nullable=False),
    Column("created_at", TIMESTAMP, nullable=False, server_default="NOW()"),
    Column("updated_at", TIMESTAMP, nullable=False, server_default="NOW()"),
    Column("deleted_at", TIMESTAMP, nullable=True),
    CheckConstraint("depth >= 0", name="comment_depth_non_negative"),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)

# ============================================================================
# VOTES TABLE (polymorphic: post or comment, soft-deleted)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("user_id", UUID, nullable=False),
    Column("votable_type", String(20), nullable=False),  # 'post' or 'comment'
    Column("votable_id", UUID, nullable=False),
    Column("value", SmallInteger, nullable=False),
    Column("created_at", TIMESTAMP, nullable=False, server_default="NOW()"),
    Column("updated_at", TIMESTAMP, nullable=False, server_default="NOW()"),
    Column("deleted_at", TIMESTAMP, nullable=True),
    CheckConstraint("value IN (1, -1)", name="vote_value_unit"),
    CheckConstraint("votable_type IN ('post', 'comment')", name="vote_votable_type"),
)

# At most one active vote per user per item
Index(
    "uq_votes_active_user_votable",
    votes_table.c.user_id,
    votes_table.c.votable_type,
    votes_table.c.votable_id,
    unique=True,
    postgresql_where=votes_table.c.deleted_at.is_(None),
)
Index("idx_votes_votable", votes_table.c.votable_type, votes_table.c.votable_id)
