"""BaseService: foundation for all folio services.

Every service receives a :class:`Site` at construction time. The Site
provides the repositories and the upload store; each repository call
manages its own connection and transaction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from folio.infrastructure.site import Site


class BaseService:
    """Base for service-layer classes.

    Usage::

        class PostService(BaseService):
            def get_post(self, post_id: str) -> ServiceResult:
                post = self._site.posts.get(post_id)
                ...
    """

    def __init__(self, site: Site) -> None:
        self._site = site
