"""Root CLI group for monitorsvc with global flags and command registration."""

from __future__ import annotations

from typing import Any

import click
from pydantic import ValidationError

from monitorsvc import __version__
from monitorsvc.commands import register_commands
from monitorsvc.commands._context import AppContext
from monitorsvc.config.settings import ConfigError, MonitorSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="monitorsvc")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and span timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--db", "database_url", default=None, help="Override [database] url for this invocation."
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    database_url: str | None,
) -> None:
    """monitorsvc: monitor catalogue service."""
    overrides: dict[str, Any] = {}
    if database_url:
        # Merged into the [database] section, other keys keep their values.
        overrides["database"] = {"url": database_url}
    try:
        settings = MonitorSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            verbose=verbose,
            log_json=log_json,
            **overrides,
        )
    except (ConfigError, ValidationError) as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
