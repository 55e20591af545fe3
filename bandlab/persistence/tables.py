"""SQLAlchemy table definitions for BandLab.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
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
    Column("caption", String(2200), nullable=False),
    Column("image_ref", String(1024), nullable=False),  # Object store key
    Column("creator", String(255), nullable=False),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("comment_count >= 0", name="comment_count_non_negative"),
)

# Keyset pagination walks (created_at desc, id desc)
Index("idx_posts_created_at_id", posts_table.c.created_at.desc(), posts_table.c.id.desc())

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True),
    # No foreign key: orphan comments are allowed when configured
    Column("post_id", UUID, nullable=False),
    Column("content", Text, nullable=False),
    Column("creator", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# Recent-comment preview reads newest comments of one post
Index(
    "idx_comments_post_id_created_at",
    comments_table.c.post_id,
    comments_table.c.created_at.desc(),
    comments_table.c.id.desc(),
)

# ============================================================================
# COMMENT COUNTER LEDGER
# ============================================================================
# One row per counted comment. The comment ID is the idempotency key: a row
# exists once the increment was applied, decremented_at is set once the
# decrement was applied.
comment_counter_ledger_table = Table(
    "comment_counter_ledger",
    metadata,
    Column("comment_id", UUID, primary_key=True),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "incremented_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="NOW()",
    ),
    Column("decremented_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_comment_counter_ledger_post_id", comment_counter_ledger_table.c.post_id)
