"""serve: run the REST API under uvicorn."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from monitorsvc.commands._base import examples_option

if TYPE_CHECKING:
    from monitorsvc.commands._context import AppContext


@click.command()
@examples_option(
    """
    # Serve on the configured address ([server] host/port)
    monitorsvc serve

    # Custom host/port, reseeding the development records at start-up
    MONITORSVC_DATABASE__POPULATE=true monitorsvc serve --host 0.0.0.0 --port 8080
    """
)
@click.option("--host", default=None, help="Bind address (defaults to [server] host).")
@click.option("--port", default=None, type=int, help="Listen port (defaults to [server] port).")
@click.pass_obj
def serve(app: AppContext, host: str | None, port: int | None) -> None:
    """Start the monitor REST API."""
    import uvicorn

    from monitorsvc.api.app import create_app

    server = app.settings.server
    uvicorn.run(
        create_app(app.settings),
        host=host or server.host,
        port=port or server.port,
        log_config=None,
    )
