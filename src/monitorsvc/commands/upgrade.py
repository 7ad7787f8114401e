"""Command: database schema migration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from monitorsvc.commands._base import examples_option

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from monitorsvc.commands._context import AppContext
    from monitorsvc.infrastructure.store import Store
    from monitorsvc.services.result import ServiceResult


@click.command()
@examples_option(
    """
    monitorsvc upgrade
    monitorsvc upgrade --check
    monitorsvc --json upgrade --check
    """
)
@click.option(
    "--check", "check_only", is_flag=True, help="Show pending migrations without applying."
)
@click.pass_obj
def upgrade(app: AppContext, check_only: bool) -> None:
    """Run pending database migrations."""
    from monitorsvc.services.upgrade import UpgradeService

    def operation(store: Store) -> Awaitable[ServiceResult[Any]]:
        svc = UpgradeService(store)
        return svc.check_pending() if check_only else svc.apply()

    app.emit(app.run(operation))
