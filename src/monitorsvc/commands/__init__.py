"""Subcommand modules for monitorsvc.

Provides register_commands() which uses deferred imports to keep
``monitorsvc --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from monitorsvc.commands.populate import populate
    from monitorsvc.commands.serve import serve
    from monitorsvc.commands.upgrade import upgrade

    cli.add_command(serve)
    cli.add_command(upgrade)
    cli.add_command(populate)
