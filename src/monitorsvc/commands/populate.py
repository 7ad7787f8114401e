"""Command: reset the database and load the development records."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from monitorsvc.commands._base import examples_option

if TYPE_CHECKING:
    from monitorsvc.commands._context import AppContext


@click.command()
@examples_option(
    """
    monitorsvc populate --yes
    monitorsvc -c ./dev/monitorsvc.toml populate --yes
    monitorsvc --db sqlite+aiosqlite:///scratch.db populate --yes
    """
)
@click.option("--yes", is_flag=True, help="Do not ask before dropping the tables.")
@click.pass_obj
def populate(app: AppContext, yes: bool) -> None:
    """Drop all monitor data and insert the development records."""
    from monitorsvc.services.populate import PopulateService

    if not yes:
        click.confirm(
            f"This drops every monitor record in {app.settings.database_url}. Continue?",
            abort=True,
        )
    app.emit(app.run(lambda store: PopulateService(store).populate()))
