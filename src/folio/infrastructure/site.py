"""Site: the persistence context owned by the process.

The Site is the single dependency injected into every service. It owns
the database engine (and with it the connection pool), the upload store,
and the post and message repositories. Construction runs the schema
initializer, so repositories are never used against a missing schema.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from folio.infrastructure.database.engine import init_database
from folio.infrastructure.repositories import MessageRepository, PostRepository
from folio.infrastructure.repositories.base import Clock, utc_now
from folio.infrastructure.uploads import UploadStore

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from folio.config.settings import FolioSettings

logger = logging.getLogger(__name__)


class Site:
    """Persistence context for one blog.

    Constructed once at startup from :class:`FolioSettings`. Services
    receive the Site via their :class:`BaseService` constructor.

    Raises:
        StorageError: The database is unreachable or the schema could not
            be created. Fatal to startup.
    """

    def __init__(self, settings: FolioSettings, *, clock: Clock = utc_now) -> None:
        self._settings = settings
        self._engine: Engine = init_database(settings.database, settings.site_root)
        self._uploads = UploadStore(
            settings.uploads_root,
            public_prefix=settings.uploads.public_prefix,
        )
        self._posts = PostRepository(self._engine, clock=clock)
        self._messages = MessageRepository(self._engine, clock=clock)
        logger.debug("Site ready at %s", settings.site_root)

    @property
    def root(self) -> Path:
        """The site root directory."""
        return self._settings.site_root

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> FolioSettings:
        """The resolved settings for this site."""
        return self._settings

    @property
    def uploads(self) -> UploadStore:
        return self._uploads

    @property
    def posts(self) -> PostRepository:
        return self._posts

    @property
    def messages(self) -> MessageRepository:
        return self._messages

    def close(self) -> None:
        """Dispose the connection pool."""
        self._engine.dispose()
