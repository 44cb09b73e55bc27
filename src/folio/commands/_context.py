"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Settings and the Site are loaded lazily so
``--help`` never needs a config file or a database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from folio.config.logging import configure_logging
from folio.errors import ConfigError, StorageError
from folio.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from folio.config.settings import FolioSettings
    from folio.infrastructure.site import Site
    from folio.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(
        self,
        *,
        config_path: str | None = None,
        json_output: bool = False,
        verbose: bool = False,
        log_json: bool = False,
    ) -> None:
        self._config_path = config_path
        self.output = OutputSettings(json_output=json_output, verbose=verbose)
        self._log_json = log_json
        self._settings: FolioSettings | None = None
        self._site: Site | None = None

        configure_logging(verbose=verbose, log_json=log_json)

    @property
    def settings(self) -> FolioSettings:
        """Resolved settings (loaded on first access).

        A configuration problem aborts the command before any storage
        access.
        """
        if self._settings is None:
            from folio.config.settings import FolioSettings

            try:
                self._settings = FolioSettings.from_cli(
                    config_path=self._config_path,
                    json_output=self.output.json_output,
                    verbose=self.output.verbose,
                    log_json=self._log_json,
                )
            except ConfigError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._settings

    @property
    def site(self) -> Site:
        """The site instance (created lazily; ensures the schema)."""
        if self._site is None:
            from folio.infrastructure.site import Site

            try:
                self._site = Site(self.settings)
            except StorageError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._site

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, settings=self.output)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not self.output.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        """Release the connection pool, if one was opened."""
        if self._site is not None:
            self._site.close()
            self._site = None
