"""Pydantic configuration sections with code-baked defaults.

Sparse TOML contract: defaults baked here, folio.toml only contains
overrides. The one value with no default is ``[database] name``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, SecretStr

from folio.domain.pagination import DEFAULT_PAGE_SIZE


class DatabaseConfig(BaseModel):
    """[database] section.

    ``driver`` is a SQLAlchemy dialect+driver string. For ``sqlite``,
    ``name`` is the database file path, relative to the site root.
    """

    model_config = {"frozen": True}

    driver: str = "postgresql+psycopg"
    host: str = "localhost"
    port: int = Field(default=5432, ge=1, le=65535)
    user: str = ""
    password: SecretStr = SecretStr("")
    name: str = Field(min_length=1)


class UploadsConfig(BaseModel):
    """[uploads] section."""

    model_config = {"frozen": True}

    root: str = "uploads"
    public_prefix: str = "/uploads"


class BlogConfig(BaseModel):
    """[blog] section."""

    model_config = {"frozen": True}

    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)


class MessagesConfig(BaseModel):
    """[messages] section."""

    model_config = {"frozen": True}

    recent_limit: int = Field(default=5, ge=1)
