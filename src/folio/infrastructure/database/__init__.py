"""Database engine, schema, and schema initializer via SQLAlchemy Core."""

from folio.infrastructure.database.engine import (
    create_db_engine,
    database_url,
    ensure_schema,
    init_database,
)
from folio.infrastructure.database.schema import (
    blog_post_images,
    blog_posts,
    hello_letters,
    metadata,
)

__all__ = [
    "blog_post_images",
    "blog_posts",
    "create_db_engine",
    "database_url",
    "ensure_schema",
    "hello_letters",
    "init_database",
    "metadata",
]
