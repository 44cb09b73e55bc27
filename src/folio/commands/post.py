"""Command group: blog posts (create, show, page)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from folio.domain.models import UploadedFile
from folio.services.posts import PostService

if TYPE_CHECKING:
    from folio.commands._context import AppContext


@click.group()
@click.pass_obj
def post(app: AppContext) -> None:
    """Publish and read blog posts."""


@post.command()
@click.argument("title")
@click.option("--body", default="", help="Post body text.")
@click.option(
    "--body-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read the post body from a file.",
)
@click.option(
    "--image",
    "images",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Image to attach (repeatable, kept in order).",
)
@click.pass_obj
def create(
    app: AppContext,
    title: str,
    body: str,
    body_file: Path | None,
    images: tuple[Path, ...],
) -> None:
    """Create a post with optional image attachments."""
    if body_file is not None:
        body = body_file.read_text(encoding="utf-8")
    files = [UploadedFile(filename=p.name, content=p.read_bytes()) for p in images]
    app.emit(PostService(app.site).create_post(title, body, files))


@post.command()
@click.argument("post_id")
@click.pass_obj
def show(app: AppContext, post_id: str) -> None:
    """Show a single post."""
    app.emit(PostService(app.site).get_post(post_id))


@post.command()
@click.argument("number", required=False, default=None)
@click.option("--size", type=click.IntRange(min=1), default=None, help="Posts per page.")
@click.pass_obj
def page(app: AppContext, number: str | None, size: int | None) -> None:
    """List one page of posts, newest first (invalid pages mean 1)."""
    app.emit(PostService(app.site).get_page(number, page_size=size))
