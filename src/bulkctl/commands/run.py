"""Command: batch commands from a stream into bulk lines."""

from __future__ import annotations

from pathlib import Path
from typing import IO, TYPE_CHECKING

import click

from bulkctl.commands._base import BulkCommand

if TYPE_CHECKING:
    from bulkctl.commands._context import AppContext


@click.command(
    cls=BulkCommand,
    examples="""\
  # Flush every 3 commands, read from stdin
  bulkctl run 3

  # Read from a file and keep log files out of the working directory
  bulkctl run 3 --input commands.txt --log-dir logs/

  # Console only, with a run summary on stderr
  bulkctl --json run 5 --no-file-log --summary""",
)
@click.argument("bulk_size", type=click.IntRange(min=1))
@click.option(
    "-i",
    "--input",
    "source",
    type=click.File("r", encoding="utf-8", errors="replace"),
    default="-",
    help="Read commands from FILE instead of stdin.",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for bulk<ticks>.log files (default: current directory).",
)
@click.option("--no-file-log", is_flag=True, help="Do not write bulk log files.")
@click.option("--summary", is_flag=True, help="Print run statistics to stderr.")
@click.pass_obj
def run(
    app: AppContext,
    bulk_size: int,
    source: IO[str],
    log_dir: Path | None,
    no_file_log: bool,
    summary: bool,
) -> None:
    """Group input lines into bulks of BULK_SIZE and echo/log each bulk.

    A line containing only "{" opens a block; everything up to the
    matching "}" is emitted as one bulk regardless of BULK_SIZE.
    Undecodable bytes are replaced with U+FFFD rather than aborting the run.
    """
    from bulkctl.pipeline.assembly import run_pipeline

    log_file = app.settings.log_file
    overrides: dict[str, object] = {}
    if log_dir is not None:
        overrides["directory"] = log_dir
    if no_file_log:
        overrides["enabled"] = False
    if overrides:
        log_file = log_file.model_copy(update=overrides)

    result = run_pipeline(
        source,
        bulk_size,
        pipeline=app.settings.pipeline,
        log_file=log_file,
    )
    if summary or not result.ok:
        app.emit_summary(result)
