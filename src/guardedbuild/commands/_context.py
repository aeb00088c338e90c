"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to subcommands via
``@click.pass_obj``.  Owns logging setup and result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from guardedbuild.config.logging import configure_logging
from guardedbuild.output.formatters import OutputSettings, format_result
from guardedbuild.services.build import BuildService

if TYPE_CHECKING:
    from guardedbuild.config.settings import GuardedBuildSettings
    from guardedbuild.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: GuardedBuildSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> BuildService:
        return BuildService(presets=self.settings.presets)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout, returns normally.  Warnings go to
          stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output_settings = OutputSettings(
            json_output=self.settings.wants_json,
            quiet=self.settings.wants_quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=output_settings)
        if result.ok:
            click.echo(output)
            if not output_settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
