"""Root CLI group for bulkctl with global flags and command registration."""

from __future__ import annotations

import click

from bulkctl import __version__
from bulkctl.commands import register_commands
from bulkctl.commands._context import AppContext
from bulkctl.config.settings import BulkSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="bulkctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON summary output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """bulkctl — batch streamed commands into bulk lines."""
    settings = BulkSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)