"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``.  Configures logging and owns result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from howser.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from howser.config.settings import HowserSettings
    from howser.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: HowserSettings) -> None:
        self.settings = settings

        from howser.config.logging import configure_logging

        configure_logging(debug=settings.debug, log_json=settings.log_json)

        if settings.debug:
            from howser.services.telemetry import enable_telemetry

            enable_telemetry()

    def emit(self, result: ServiceResult, *, verbose: bool | None = None) -> None:
        """Format and output a ServiceResult with the exit convention.

        * ``result.ok``: report on stdout, exit code 0, even when the
          report lists problems.
        * Fatal failure: report on stderr, exit code 1.
        """
        if verbose is None:
            verbose = self.settings.report.verbose
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
