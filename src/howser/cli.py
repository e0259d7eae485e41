"""Root CLI group for howser with global flags and command registration."""

from __future__ import annotations

import click

from howser import __version__
from howser.commands import register_commands
from howser.commands._base import HowserGroup
from howser.commands._context import AppContext
from howser.config.settings import HowserSettings


@click.group(
    cls=HowserGroup,
    invoke_without_command=True,
    examples="""\
  howser check templates/readme.rx.md
  howser validate templates/readme.rx.md README.md
  howser --json validate --pharmacy pharmacy.toml""",
)
@click.version_option(version=__version__, prog_name="howser")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("--debug", is_flag=True, help="Debug logging and timing information.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    debug: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """howser — document conformity validator for Markdown prescriptions."""
    ctx.ensure_object(dict)
    settings = HowserSettings.from_cli(
        config_path=config_path,
        json_output=json_output or None,
        quiet=quiet or None,
        debug=debug or None,
        log_json=log_json or None,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
