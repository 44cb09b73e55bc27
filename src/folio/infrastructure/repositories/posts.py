"""Write and read paths for blog posts and their ordered images."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, insert, select
from sqlalchemy.exc import SQLAlchemyError

from folio.domain.ids import new_post_id
from folio.domain.models import Post
from folio.domain.pagination import offset
from folio.errors import PostNotFoundError, StorageError
from folio.infrastructure.database.schema import blog_post_images, blog_posts
from folio.infrastructure.repositories.base import BaseRepository, as_utc

if TYPE_CHECKING:
    from sqlalchemy import Connection

logger = logging.getLogger(__name__)


class PostRepository(BaseRepository):
    """Encapsulates SQL for creating, fetching, and paging posts."""

    def create(self, title: str, body: str, image_refs: Sequence[str]) -> str:
        """Insert a post and its image references as one transaction.

        No field validation is applied; empty titles and bodies are stored
        as given.

        Returns:
            The generated post ID.

        Raises:
            StorageError: The insert failed; nothing was written.
        """
        post_id = new_post_id()
        created_at = self._clock()
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    insert(blog_posts).values(
                        id=post_id,
                        title=title,
                        body=body,
                        created_at=created_at,
                    )
                )
                if image_refs:
                    conn.execute(
                        insert(blog_post_images),
                        [
                            {"post_id": post_id, "position": i, "reference": ref}
                            for i, ref in enumerate(image_refs)
                        ],
                    )
        except SQLAlchemyError as exc:
            msg = f"Could not insert post: {exc}"
            raise StorageError(msg) from exc

        logger.debug("Inserted post %s with %d image(s)", post_id, len(image_refs))
        return post_id

    def get(self, post_id: str) -> Post:
        """Fetch one post by ID, images in insertion order.

        Raises:
            PostNotFoundError: No post has this ID.
            StorageError: The query failed.
        """
        try:
            with self._engine.connect() as conn:
                row = (
                    conn.execute(select(blog_posts).where(blog_posts.c.id == post_id))
                    .mappings()
                    .first()
                )
                if row is None:
                    raise PostNotFoundError(post_id)
                images = _images_for(conn, [post_id])
        except SQLAlchemyError as exc:
            msg = f"Could not fetch post {post_id!r}: {exc}"
            raise StorageError(msg) from exc

        return _to_post(row, images.get(post_id, []))

    def count(self) -> int:
        """Total number of stored posts."""
        try:
            with self._engine.connect() as conn:
                return int(conn.execute(select(func.count(blog_posts.c.id))).scalar_one() or 0)
        except SQLAlchemyError as exc:
            msg = f"Could not count posts: {exc}"
            raise StorageError(msg) from exc

    def get_page(self, page: int, page_size: int) -> tuple[list[Post], int]:
        """Fetch one page of posts, newest first, plus the unfiltered total.

        *page* is 1-based and must already be clamped to ``>= 1``. A page
        past the end yields an empty list together with the real total.
        """
        start = offset(page, page_size)
        stmt = (
            select(blog_posts)
            .order_by(blog_posts.c.created_at.desc(), blog_posts.c.id.desc())
            .limit(page_size)
            .offset(start)
        )
        try:
            with self._engine.connect() as conn:
                total = int(conn.execute(select(func.count(blog_posts.c.id))).scalar_one() or 0)
                rows = conn.execute(stmt).mappings().all()
                images = _images_for(conn, [str(r["id"]) for r in rows])
        except SQLAlchemyError as exc:
            msg = f"Could not fetch page {page} of posts: {exc}"
            raise StorageError(msg) from exc

        posts = [_to_post(row, images.get(str(row["id"]), [])) for row in rows]
        return posts, total


def _images_for(conn: Connection, post_ids: list[str]) -> dict[str, list[str]]:
    """Map post ID to its image references, ordered by position."""
    if not post_ids:
        return {}
    rows = conn.execute(
        select(blog_post_images.c.post_id, blog_post_images.c.reference)
        .where(blog_post_images.c.post_id.in_(post_ids))
        .order_by(blog_post_images.c.post_id, blog_post_images.c.position)
    ).fetchall()
    grouped: dict[str, list[str]] = defaultdict(list)
    for row in rows:
        grouped[str(row.post_id)].append(str(row.reference))
    return grouped


def _to_post(row: Any, images: list[str]) -> Post:
    return Post(
        id=str(row["id"]),
        title=row["title"],
        body=row["body"],
        images=images,
        created_at=as_utc(row["created_at"]),
    )
