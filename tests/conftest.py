"""Shared pytest fixtures and test helpers for folio tests."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from folio.config.models import DatabaseConfig
from folio.config.settings import FolioSettings
from folio.infrastructure.database.engine import init_database
from folio.infrastructure.site import Site

SITE_TOML = '[database]\ndriver = "sqlite"\nname = "folio.db"\n'


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host FOLIO_* variables out of the settings under test."""
    monkeypatch.delenv("FOLIO_CONFIG", raising=False)
    monkeypatch.delenv("FOLIO_DATABASE", raising=False)
    monkeypatch.delenv("FOLIO_DATABASE__NAME", raising=False)
    monkeypatch.delenv("FOLIO_DATABASE__DRIVER", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """A clock that advances one second per call, so inserts sort in order."""
    counter = itertools.count()
    base = datetime(2030, 1, 1, tzinfo=UTC)

    def _now() -> datetime:
        return base + timedelta(seconds=next(counter))

    return _now


@pytest.fixture
def settings(tmp_path: Path) -> FolioSettings:
    """SQLite-backed settings rooted at a temp directory."""
    return FolioSettings.from_cli(
        site_root=tmp_path,
        database=DatabaseConfig(driver="sqlite", name="folio.db"),
    )


@pytest.fixture
def db_engine(settings: FolioSettings) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(settings.database, settings.site_root)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def site(settings: FolioSettings, clock: Callable[[], datetime]) -> Iterator[Site]:
    """Fully initialized site on a temp directory with a stepping clock."""
    s = Site(settings, clock=clock)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def _isolated_site(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Write a SQLite folio.toml and chdir into it for CLI tests.

    Use via ``@pytest.mark.usefixtures("_isolated_site")``.
    """
    (tmp_path / "folio.toml").write_text(SITE_TOML)
    monkeypatch.chdir(tmp_path)
