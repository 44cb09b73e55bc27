"""Tests for the Site persistence context."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import inspect

from folio.config.models import DatabaseConfig
from folio.config.settings import FolioSettings
from folio.errors import StorageError
from folio.infrastructure.site import Site


class TestSite:
    def test_schema_ready_on_construction(self, site: Site) -> None:
        assert "blog_posts" in inspect(site.engine).get_table_names()

    def test_uploads_rooted_under_site(self, site: Site, tmp_path: Path) -> None:
        assert site.uploads.root == tmp_path / "uploads"
        assert site.uploads.public_prefix == "/uploads"

    def test_repositories_share_engine(self, site: Site) -> None:
        post_id = site.posts.create("t", "b", [])
        site.messages.append("n", "e", "m")
        assert site.posts.get(post_id).title == "t"
        assert site.messages.count() == 1

    def test_data_survives_reopen(self, settings: FolioSettings) -> None:
        first = Site(settings)
        post_id = first.posts.create("durable", "", [])
        first.close()

        second = Site(settings)
        try:
            assert second.posts.get(post_id).title == "durable"
        finally:
            second.close()

    def test_unreachable_database_is_fatal(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")
        settings = FolioSettings.from_cli(
            site_root=tmp_path,
            database=DatabaseConfig(driver="sqlite", name=str(blocker / "folio.db")),
        )
        with pytest.raises(StorageError):
            Site(settings)
