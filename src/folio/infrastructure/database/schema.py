"""SQLAlchemy Core table definitions for the folio database.

Column lengths for titles, names and emails match the production
PostgreSQL schema. The core performs no length checks of its own.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

blog_posts = Table(
    "blog_posts",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("title", String(200), nullable=False),
    Column("body", Text, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

# Ordered image references; written once, in the post's insert transaction.
blog_post_images = Table(
    "blog_post_images",
    metadata,
    Column("post_id", String(36), ForeignKey("blog_posts.id"), nullable=False),
    Column("position", Integer, nullable=False),
    Column("reference", Text, nullable=False),
    UniqueConstraint("post_id", "position"),
)

hello_letters = Table(
    "hello_letters",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(45), nullable=False),
    Column("email", String(45), nullable=False),
    Column("message", Text, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

# ---------------------------------------------------------------------------
# Indexes for the recency sort key
# ---------------------------------------------------------------------------

Index("ix_blog_posts_created_at", blog_posts.c.created_at)
Index("ix_blog_post_images_post", blog_post_images.c.post_id)
Index("ix_hello_letters_created_at", hello_letters.c.created_at)
