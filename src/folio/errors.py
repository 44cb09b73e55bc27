"""Exception taxonomy shared by the infrastructure and service layers.

Infrastructure raises these; services translate them into
:class:`~folio.services.result.ServiceResult` error codes.
``ConfigError`` and a ``StorageError`` raised while ensuring the schema
are fatal to startup.
"""

from __future__ import annotations


class FolioError(Exception):
    """Base class for all folio errors."""


class ConfigError(FolioError):
    """Startup configuration is missing or malformed."""


class StorageError(FolioError):
    """The persistence backend is unreachable or a query failed."""


class PostNotFoundError(FolioError):
    """No post exists with the requested identifier."""

    def __init__(self, post_id: str) -> None:
        super().__init__(f"No post found with ID '{post_id}'")
        self.post_id = post_id


class UploadError(FolioError, OSError):
    """An uploaded file could not be written to the uploads root."""
