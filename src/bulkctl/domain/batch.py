"""Batch joining rules.

A flushed batch becomes one synthetic command: the payloads joined in
order with ``", "`` and prefixed with ``"bulk: "``.  The synthetic
command inherits the timestamp of the first batched command, which in
turn names the log file it lands in.
"""

from __future__ import annotations

from collections.abc import Sequence

from bulkctl.domain.command import Command

BULK_TAG = "bulk: "
SEPARATOR = ", "


def join_texts(commands: Sequence[Command]) -> str:
    """Join command payloads in order, without leading or trailing separator."""
    return SEPARATOR.join(c.text for c in commands)


def make_bulk_command(commands: Sequence[Command]) -> Command:
    """Build the synthetic command for a non-empty batch.

    Raises:
        ValueError: If *commands* is empty.  Empty batches never flush.
    """
    if not commands:
        msg = "Cannot build a bulk command from an empty batch"
        raise ValueError(msg)
    return Command(text=BULK_TAG + join_texts(commands), timestamp=commands[0].timestamp)
