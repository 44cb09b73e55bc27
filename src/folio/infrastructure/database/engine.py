"""Database engine setup and the idempotent schema initializer.

Production runs against PostgreSQL; tests and single-machine installs can
use SQLite by setting ``driver = "sqlite"``.

SQLAlchemy Core (not ORM) is used: every repository call checks a
connection out of the shared pool, runs its statements, and releases it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

from folio.config.models import DatabaseConfig
from folio.errors import StorageError
from folio.infrastructure.database.schema import metadata

logger = logging.getLogger(__name__)


def database_url(config: DatabaseConfig, site_root: Path) -> URL:
    """Build the SQLAlchemy URL for *config*.

    For SQLite, a relative ``name`` resolves against *site_root*.
    """
    if config.driver.startswith("sqlite"):
        db_path = Path(config.name)
        if not db_path.is_absolute():
            db_path = site_root / db_path
        return URL.create(config.driver, database=str(db_path))

    return URL.create(
        config.driver,
        username=config.user or None,
        password=config.password.get_secret_value() or None,
        host=config.host,
        port=config.port,
        database=config.name,
    )


def create_db_engine(url: URL) -> Engine:
    """Create a pooled engine; SQLite connections get WAL and foreign keys."""
    engine = create_engine(url, echo=False, pool_pre_ping=True)

    if url.get_backend_name() == "sqlite":

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def ensure_schema(engine: Engine) -> None:
    """Create the post and guest-message tables if they are absent.

    Idempotent: safe to call on every process start. Must complete
    before any repository is used.

    Raises:
        StorageError: The backend is unreachable or DDL failed.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        metadata.create_all(engine, checkfirst=True)
    except SQLAlchemyError as exc:
        msg = f"Could not initialize schema: {exc}"
        raise StorageError(msg) from exc
    logger.debug("Schema ready on %s", engine.url.render_as_string(hide_password=True))


def init_database(config: DatabaseConfig, site_root: Path) -> Engine:
    """Create the engine for *config* and ensure the schema exists.

    Returns the engine ready for use. The engine is disposed again if
    the schema cannot be ensured.
    """
    url = database_url(config, site_root)
    if url.get_backend_name() == "sqlite" and url.database:
        try:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Could not create database directory: {exc}"
            raise StorageError(msg) from exc

    engine = create_db_engine(url)
    try:
        ensure_schema(engine)
    except StorageError:
        engine.dispose()
        raise
    return engine
