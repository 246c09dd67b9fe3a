"""BatchProcessor decides when accumulated commands are flushed.

Outside a block, a batch flushes as soon as it holds ``bulk_size``
commands.  Inside a block the threshold is ignored: the block boundary
is authoritative, so the batch flushes on block start (draining what
came before the block) and on block end (emitting the whole block).

:meth:`close` is the terminal drain.  A trailing partial batch is
flushed; the contents of a block still open at close are discarded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from bulkctl.domain.batch import make_bulk_command
from bulkctl.pipeline.base import CommandProcessor

if TYPE_CHECKING:
    from bulkctl.domain.command import Command

log = structlog.get_logger(__name__)


class BatchProcessor(CommandProcessor):
    """Accumulates commands and emits one joined command per flush.

    Args:
        bulk_size: Size threshold, must be positive.
        next_stage: Receives the synthetic joined commands.

    Raises:
        ValueError: If *bulk_size* is not positive.
    """

    def __init__(self, bulk_size: int, next_stage: CommandProcessor | None = None) -> None:
        if bulk_size <= 0:
            msg = f"Bulk size must be a positive integer, got {bulk_size}"
            raise ValueError(msg)
        super().__init__(next_stage)
        self._bulk_size = bulk_size
        self._batch: list[Command] = []
        self._forced = False
        self._closed = False
        self.flushes = 0
        self.dropped = 0

    @property
    def bulk_size(self) -> int:
        return self._bulk_size

    @property
    def forced(self) -> bool:
        """True while inside a block."""
        return self._forced

    @property
    def pending(self) -> tuple[Command, ...]:
        return tuple(self._batch)

    @property
    def closed(self) -> bool:
        return self._closed

    def process_command(self, command: Command) -> None:
        if self._closed:
            msg = "BatchProcessor is closed"
            raise RuntimeError(msg)
        self._batch.append(command)
        if not self._forced and len(self._batch) >= self._bulk_size:
            self.flush()

    def on_block_start(self) -> None:
        self._forced = True
        self.flush()

    def on_block_end(self) -> None:
        self._forced = False
        self.flush()

    def flush(self) -> None:
        """Emit the current batch downstream as one command, then clear it."""
        try:
            if self._batch:
                bulk = make_bulk_command(self._batch)
                self.flushes += 1
                log.debug("batch.flush", size=len(self._batch), forced=self._forced)
                self._forward(bulk)
        finally:
            self._batch.clear()

    def close(self) -> None:
        """Drain the trailing batch; discard an unterminated block.

        Safe to call more than once.
        """
        if self._closed:
            return
        self._closed = True
        if self._forced:
            if self._batch:
                self.dropped += len(self._batch)
                log.warning("batch.dropped", size=len(self._batch), reason="unterminated_block")
            self._batch.clear()
            return
        self.flush()
