"""Rich/JSON rendering of a RunResult.

The run summary goes to stderr, so neither mode ever mixes with the
bulk lines written to stdout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text

from bulkctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from bulkctl.services.result import RunResult


def format_result(result: RunResult, *, json_output: bool = False) -> str:
    """Format a RunResult for display.

    Args:
        result: The run result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if result.ok:
        _status_line(console, result)
        for key, value in result.stats.model_dump().items():
            _field(console, key, value)
        for warning in result.warnings:
            console.print(Text("WARNING: ", style="bulk.warning"), Text(warning), sep="")
    else:
        msg = result.error.message if result.error else "Unknown error"
        console.print(Text("ERROR", style="bulk.error"), Text(f"  {result.op} - {msg}"), sep="")
    return get_output(console).rstrip("\n")


def _status_line(console: Console, result: RunResult) -> None:
    label = Text("OK", style="bulk.ok")
    op = Text(f"  {result.op}", style="bulk.op")
    console.print(label, op, sep="")


def _field(console: Console, key: str, value: int) -> None:
    k = Text(f"  {key}: ", style="bulk.key")
    v = Text(str(value), style="bulk.count" if value else "")
    console.print(k, v, sep="")
