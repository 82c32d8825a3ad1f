"""SQLAlchemy table definitions for Canopy.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
# Ids are only unique per entity, hence the composite key. parent_id has no
# foreign key: replies may outlive their parent and then display top-level.
# Mentions are derived from text on read and not stored.
comments_table = Table(
    "comments",
    metadata,
    Column("entity_id", String(255), nullable=False),  # Article/post/pitch/idea
    Column("id", String(64), nullable=False),
    Column("author", String(255), nullable=False),  # Display name at posting time
    Column("author_id", String(255), nullable=True),  # NULL for legacy comments
    Column("text", Text, nullable=False),
    Column("parent_id", String(64), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    PrimaryKeyConstraint("entity_id", "id", name="pk_comments"),
)

Index("idx_comments_parent_id", comments_table.c.entity_id, comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)
Index("idx_comments_created_at", comments_table.c.created_at)
