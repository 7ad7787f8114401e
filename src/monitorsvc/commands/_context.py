"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Runs async service operations against a store that
lives only for the duration of the command, and centralizes result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import click

from monitorsvc.output.formatters import format_result

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from monitorsvc.config.settings import MonitorSettings
    from monitorsvc.infrastructure.store import Store
    from monitorsvc.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store is only opened inside :meth:`run`, so ``--help`` and
    ``--version`` never touch the database.
    """

    def __init__(self, settings: MonitorSettings) -> None:
        self.settings = settings

        from monitorsvc.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from monitorsvc.services.telemetry import enable_telemetry

            enable_telemetry()

    def run(
        self, operation: Callable[[Store], Awaitable[ServiceResult[Any]]]
    ) -> ServiceResult[Any]:
        """Open a store, await *operation* with it, and dispose the store."""
        from monitorsvc.infrastructure.store import Store

        async def _main() -> ServiceResult[Any]:
            store = Store.from_settings(self.settings)
            try:
                return await operation(store)
            finally:
                await store.dispose()

        return asyncio.run(_main())

    def emit(self, result: ServiceResult[Any]) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout; warnings go to stderr in human mode.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result, json_output=self.settings.json_output, verbose=self.settings.verbose
        )
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
