"""Command group: guest messages (add, recent)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from folio.services.messages import MessageService

if TYPE_CHECKING:
    from folio.commands._context import AppContext


@click.group()
@click.pass_obj
def message(app: AppContext) -> None:
    """Leave and read guest messages."""


@message.command()
@click.argument("name")
@click.argument("email")
@click.argument("text")
@click.pass_obj
def add(app: AppContext, name: str, email: str, text: str) -> None:
    """Leave a guest message."""
    app.emit(MessageService(app.site).leave_message(name, email, text))


@message.command()
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Number of messages.")
@click.pass_obj
def recent(app: AppContext, limit: int | None) -> None:
    """Show the most recent guest messages."""
    app.emit(MessageService(app.site).recent_messages(limit))
