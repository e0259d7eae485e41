"""Command: validate documents against prescriptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from howser.commands._base import HowserCommand

if TYPE_CHECKING:
    from howser.commands._context import AppContext


@click.command(
    cls=HowserCommand,
    examples="""\
  howser validate templates/readme.rx.md README.md
  howser validate -v templates/readme.rx.md README.md
  howser validate --pharmacy pharmacy.toml
  howser validate --pharmacy pharmacy.toml --fail-early""",
)
@click.option(
    "-p",
    "--pharmacy",
    type=click.Path(dir_okay=False),
    default=None,
    help="Validate every pair listed in a pharmacy .toml file.",
)
@click.option(
    "-e",
    "--fail-early",
    is_flag=True,
    help="With --pharmacy, stop after the first document with errors.",
)
@click.option(
    "-v", "--verbose", is_flag=True, help="Use verbose (multiline) output for errors."
)
@click.argument("prescription", required=False, metavar="PRESCRIPTION")
@click.argument("document", required=False, metavar="DOCUMENT")
@click.pass_obj
def validate(
    app: AppContext,
    pharmacy: str | None,
    fail_early: bool,
    verbose: bool,
    prescription: str | None,
    document: str | None,
) -> None:
    """Validate a Markdown document against a prescription."""
    from howser.services.validate import ValidateService

    svc = ValidateService(app.settings)
    verbose = verbose or app.settings.report.verbose

    if pharmacy:
        if prescription or document:
            raise click.UsageError("PRESCRIPTION and DOCUMENT cannot be combined with --pharmacy.")
        app.emit(svc.pharmacy(pharmacy, fail_early=fail_early or None), verbose=verbose)
        return

    if fail_early:
        raise click.UsageError("--fail-early requires --pharmacy.")
    if not prescription or not document:
        raise click.UsageError("Missing PRESCRIPTION and DOCUMENT (or --pharmacy).")
    app.emit(svc.validate(prescription, document), verbose=verbose)
