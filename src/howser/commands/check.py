"""Command: verify that a prescription is well formed."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from howser.commands._base import HowserCommand

if TYPE_CHECKING:
    from howser.commands._context import AppContext


@click.command(
    cls=HowserCommand,
    examples="""\
  howser check templates/readme.rx.md
  howser check -v templates/readme.rx.md
  howser --json check templates/readme.rx.md""",
)
@click.option(
    "-v", "--verbose", is_flag=True, help="Use verbose (multiline) output for warnings."
)
@click.argument("prescription", metavar="PRESCRIPTION")
@click.pass_obj
def check(app: AppContext, verbose: bool, prescription: str) -> None:
    """Verify that a prescription file uses directives correctly."""
    from howser.services.check import CheckService

    result = CheckService(app.settings).check(prescription)
    app.emit(result, verbose=verbose or app.settings.report.verbose)
