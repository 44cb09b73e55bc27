"""PostService: publishing and reading blog posts.

Create pipeline: STORE UPLOADS → INSERT POST + IMAGES → RESPOND.

Uploads are stored before the post row is written. If any upload fails
no post is created. The two steps do not share a transaction: files
stored before a failed insert stay on disk unreferenced.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from folio.config.logging import operation
from folio.domain.ids import POST_ID_PATTERN
from folio.domain.models import PostPage, UploadedFile
from folio.domain.pagination import clamp_page, last_page
from folio.errors import PostNotFoundError, StorageError, UploadError
from folio.services.base import BaseService
from folio.services.result import ServiceResult

logger = logging.getLogger(__name__)


class PostService(BaseService):
    """Handles post creation, lookup, and paging.

    Callers are trusted: create requests arrive already authenticated.
    """

    def create_post(
        self,
        title: str,
        body: str,
        files: Sequence[UploadedFile] = (),
    ) -> ServiceResult:
        """Store *files* then insert the post referencing them in order."""
        op = "create_post"
        with operation(op, images=len(files)):
            try:
                refs = self._site.uploads.store_all(files)
            except UploadError as exc:
                logger.warning("Post %r not created: %s", title, exc)
                return ServiceResult.failure(op, "UPLOAD_FAILED", str(exc))

            try:
                post_id = self._site.posts.create(title, body, refs)
            except StorageError as exc:
                logger.error("Post %r not created: %s", title, exc)
                warnings = [f"Unreferenced upload: {ref}" for ref in refs]
                result = ServiceResult.failure(op, "STORAGE_ERROR", str(exc))
                return result.model_copy(update={"warnings": warnings})

            logger.info("Created post %s", post_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={"id": post_id, "title": title, "images": refs},
        )

    def get_post(self, post_id: str) -> ServiceResult:
        """Retrieve a single post by ID."""
        op = "get_post"
        if not POST_ID_PATTERN.match(post_id):
            return ServiceResult.failure(
                op, "NOT_FOUND", f"No post found with ID '{post_id}'", id=post_id
            )
        with operation(op, post_id=post_id):
            try:
                post = self._site.posts.get(post_id)
            except PostNotFoundError as exc:
                return ServiceResult.failure(op, "NOT_FOUND", str(exc), id=post_id)
            except StorageError as exc:
                logger.error("get_post failed: %s", exc)
                return ServiceResult.failure(op, "STORAGE_ERROR", str(exc))
        return ServiceResult(ok=True, op=op, data=post.model_dump(mode="json"))

    def get_page(
        self,
        page: int | str | None = None,
        *,
        page_size: int | None = None,
    ) -> ServiceResult:
        """Retrieve one page of posts, newest first.

        *page* is the raw query value; missing or invalid values mean 1.
        *page_size* defaults to the configured ``[blog] page_size``.
        A non-positive size is rejected with ``INVALID_PAGE_SIZE``.
        """
        op = "get_page"
        number = clamp_page(page)
        size = self._site.settings.blog.page_size if page_size is None else page_size
        if size < 1:
            msg = f"Page size must be at least 1, got {size}"
            return ServiceResult.failure(op, "INVALID_PAGE_SIZE", msg, page_size=size)
        with operation(op, page=number):
            try:
                posts, total = self._site.posts.get_page(number, size)
            except StorageError as exc:
                logger.error("get_page failed: %s", exc)
                return ServiceResult.failure(op, "STORAGE_ERROR", str(exc))

        result = PostPage(
            posts=posts,
            page=number,
            page_size=size,
            total=total,
            last_page=last_page(total, size),
        )
        return ServiceResult(ok=True, op=op, data=result.model_dump(mode="json"))
