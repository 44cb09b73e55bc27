"""Tests for engine setup and the schema initializer."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import SecretStr
from sqlalchemy import inspect, text
from sqlalchemy.engine import URL, Engine

from folio.config.models import DatabaseConfig
from folio.errors import StorageError
from folio.infrastructure.database.engine import (
    create_db_engine,
    database_url,
    ensure_schema,
    init_database,
)


class TestDatabaseUrl:
    def test_postgres_defaults(self, tmp_path: Path) -> None:
        cfg = DatabaseConfig(user="blog", password=SecretStr("s3cret"), name="blog")
        url = database_url(cfg, tmp_path)
        assert url.drivername == "postgresql+psycopg"
        assert url.host == "localhost"
        assert url.port == 5432
        assert url.username == "blog"
        assert url.password == "s3cret"
        assert url.database == "blog"

    def test_password_hidden_when_rendered(self, tmp_path: Path) -> None:
        cfg = DatabaseConfig(user="blog", password=SecretStr("s3cret"), name="blog")
        rendered = database_url(cfg, tmp_path).render_as_string(hide_password=True)
        assert "s3cret" not in rendered

    def test_sqlite_relative_to_site_root(self, tmp_path: Path) -> None:
        cfg = DatabaseConfig(driver="sqlite", name="data/folio.db")
        url = database_url(cfg, tmp_path)
        assert url.database == str(tmp_path / "data" / "folio.db")

    def test_sqlite_absolute_path_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "abs.db"
        cfg = DatabaseConfig(driver="sqlite", name=str(target))
        assert database_url(cfg, Path("/elsewhere")).database == str(target)


class TestCreateDbEngine:
    def test_sqlite_wal_and_foreign_keys(self, tmp_path: Path) -> None:
        engine = create_db_engine(URL.create("sqlite", database=str(tmp_path / "t.db")))
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        engine.dispose()


class TestEnsureSchema:
    def test_creates_tables(self, db_engine: Engine) -> None:
        tables = set(inspect(db_engine).get_table_names())
        assert {"blog_posts", "blog_post_images", "hello_letters"} <= tables

    def test_idempotent(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            conn.execute(
                text(
                    "INSERT INTO hello_letters (id, name, email, message, created_at) "
                    "VALUES ('m1', 'a', 'b', 'c', '2030-01-01 00:00:00')"
                )
            )
        ensure_schema(db_engine)
        ensure_schema(db_engine)
        with db_engine.connect() as conn:
            assert conn.execute(text("SELECT count(*) FROM hello_letters")).scalar() == 1

    def test_unreachable_backend_raises_storage_error(self, tmp_path: Path) -> None:
        missing = tmp_path / "no" / "such" / "dir" / "x.db"
        engine = create_db_engine(URL.create("sqlite", database=str(missing)))
        with pytest.raises(StorageError, match="Could not initialize schema"):
            ensure_schema(engine)
        engine.dispose()


class TestInitDatabase:
    def test_creates_sqlite_file_and_parents(self, tmp_path: Path) -> None:
        cfg = DatabaseConfig(driver="sqlite", name="nested/dir/folio.db")
        engine = init_database(cfg, tmp_path)
        assert (tmp_path / "nested" / "dir" / "folio.db").exists()
        engine.dispose()

    def test_twice_on_same_file(self, tmp_path: Path) -> None:
        cfg = DatabaseConfig(driver="sqlite", name="folio.db")
        init_database(cfg, tmp_path).dispose()
        engine = init_database(cfg, tmp_path)
        assert "blog_posts" in inspect(engine).get_table_names()
        engine.dispose()
