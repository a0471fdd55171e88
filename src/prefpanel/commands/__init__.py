"""Subcommand modules for prefpanel.

Provides register_commands() which uses deferred imports to keep
``prefpanel --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from prefpanel.commands.render import render
    from prefpanel.commands.seed import seed
    from prefpanel.commands.show import reset, show
    from prefpanel.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(seed)
    cli.add_command(render)
    cli.add_command(show)
    cli.add_command(reset)
