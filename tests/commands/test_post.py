"""Tests for the post CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from folio.cli import cli


def _create(runner: CliRunner, *args: str) -> dict:
    result = runner.invoke(cli, ["--json", "post", "create", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


@pytest.mark.usefixtures("_isolated_site")
class TestPostCreate:
    def test_create(self, cli_runner: CliRunner) -> None:
        data = _create(cli_runner, "CLI Post", "--body", "text")
        assert data["ok"] is True
        assert data["data"]["title"] == "CLI Post"

    def test_create_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["post", "create", "Plain"])
        assert result.exit_code == 0
        assert "OK" in result.output

    def test_create_with_images(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "a.png").write_bytes(b"A")
        (tmp_path / "b.jpg").write_bytes(b"B")
        data = _create(cli_runner, "Pics", "--image", "a.png", "--image", "b.jpg")
        refs = data["data"]["images"]
        assert [Path(r).suffix for r in refs] == [".png", ".jpg"]
        assert (tmp_path / "uploads" / Path(refs[0]).name).read_bytes() == b"A"

    def test_body_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "draft.md").write_text("From file", encoding="utf-8")
        post_id = _create(cli_runner, "Draft", "--body-file", "draft.md")["data"]["id"]
        shown = cli_runner.invoke(cli, ["--json", "post", "show", post_id])
        assert json.loads(shown.output)["data"]["body"] == "From file"

    def test_missing_image_rejected(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["post", "create", "X", "--image", "nope.png"])
        assert result.exit_code == 2


@pytest.mark.usefixtures("_isolated_site")
class TestPostShow:
    def test_show(self, cli_runner: CliRunner) -> None:
        post_id = _create(cli_runner, "Shown", "--body", "hello body")["data"]["id"]
        result = cli_runner.invoke(cli, ["post", "show", post_id])
        assert result.exit_code == 0
        assert "Shown" in result.output
        assert "hello body" in result.output

    def test_not_found_exits_1(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "post", "show", "missing"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["code"] == "NOT_FOUND"


@pytest.mark.usefixtures("_isolated_site")
class TestPostPage:
    def test_page_listing(self, cli_runner: CliRunner) -> None:
        for i in range(4):
            _create(cli_runner, f"Post {i}")
        result = cli_runner.invoke(cli, ["--json", "post", "page"])
        data = json.loads(result.output)["data"]
        assert data["page"] == 1
        assert data["total"] == 4
        assert data["last_page"] == 2
        assert len(data["posts"]) == 3

    def test_invalid_page_means_first(self, cli_runner: CliRunner) -> None:
        _create(cli_runner, "Only")
        result = cli_runner.invoke(cli, ["--json", "post", "page", "abc"])
        assert json.loads(result.output)["data"]["page"] == 1

    def test_custom_size(self, cli_runner: CliRunner) -> None:
        for i in range(4):
            _create(cli_runner, f"Post {i}")
        result = cli_runner.invoke(cli, ["--json", "post", "page", "2", "--size", "2"])
        data = json.loads(result.output)["data"]
        assert len(data["posts"]) == 2
        assert data["last_page"] == 2

    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["post", "page"])
        assert result.exit_code == 0
        assert "page 1 of 0" in result.output
