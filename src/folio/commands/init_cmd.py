"""Command: schema initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from folio.services.result import ServiceResult

if TYPE_CHECKING:
    from folio.commands._context import AppContext


@click.command("init")
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the post and message tables if they do not exist."""
    site = app.site
    app.emit(
        ServiceResult(
            ok=True,
            op="init",
            data={
                "database": site.engine.url.render_as_string(hide_password=True),
                "uploads_root": str(site.uploads.root),
            },
        )
    )
