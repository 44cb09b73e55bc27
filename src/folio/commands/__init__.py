"""Subcommand modules for folio.

Provides register_commands() which uses deferred imports to keep
``folio --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root group."""
    # --- Groups ---
    from folio.commands.message import message
    from folio.commands.post import post

    cli.add_command(post)
    cli.add_command(message)

    # --- Standalone commands ---
    from folio.commands.init_cmd import init_cmd

    cli.add_command(init_cmd)
