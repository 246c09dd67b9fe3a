"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to subcommands via
``@click.pass_obj``.  Configures logging and renders run summaries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bulkctl.output.formatters import format_result

if TYPE_CHECKING:
    from bulkctl.config.settings import BulkSettings
    from bulkctl.services.result import RunResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: BulkSettings) -> None:
        self.settings = settings

        from bulkctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def emit_summary(self, result: RunResult) -> None:
        """Write the run summary to stderr.

        stdout carries only bulk lines, so the summary never goes there.
        A failed result exits with code 1.
        """
        output = format_result(result, json_output=self.settings.json_output)
        click.echo(output, err=True)
        if not result.ok:
            raise SystemExit(1)
