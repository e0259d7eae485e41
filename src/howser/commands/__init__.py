"""Subcommand modules for howser.

Provides register_commands(), which imports commands lazily to keep
``howser --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from howser.commands.check import check
    from howser.commands.validate import validate

    cli.add_command(check)
    cli.add_command(validate)
