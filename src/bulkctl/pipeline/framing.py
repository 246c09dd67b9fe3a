"""BlockFramer: turns delimiter lines into block lifecycle calls.

Open and close tokens never travel downstream as commands.  Only the
outermost boundary is reported: nested delimiters adjust the depth
counter and are otherwise consumed silently.

A close token at depth 0 is a stray closer.  The depth is clamped at 0
and the token is dropped, so a later open token still starts a block.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from bulkctl.pipeline.base import CommandProcessor

if TYPE_CHECKING:
    from bulkctl.domain.command import Command

log = structlog.get_logger(__name__)

OPEN_TOKEN = "{"
CLOSE_TOKEN = "}"


class BlockFramer(CommandProcessor):
    """Filter that demultiplexes block delimiters from ordinary commands."""

    def __init__(
        self,
        next_stage: CommandProcessor | None = None,
        *,
        open_token: str = OPEN_TOKEN,
        close_token: str = CLOSE_TOKEN,
    ) -> None:
        if open_token == close_token:
            msg = f"Open and close tokens must differ (both {open_token!r})"
            raise ValueError(msg)
        super().__init__(next_stage)
        self._open = open_token
        self._close = close_token
        self._depth = 0
        self.commands = 0
        self.stray_closers = 0
        self.max_depth = 0

    @property
    def depth(self) -> int:
        return self._depth

    def process_command(self, command: Command) -> None:
        if command.text == self._open:
            self._depth += 1
            self.max_depth = max(self.max_depth, self._depth)
            if self._depth == 1:
                log.debug("block.start")
                if self._next is not None:
                    self._next.on_block_start()
            return

        if command.text == self._close:
            if self._depth == 0:
                self.stray_closers += 1
                log.warning("framer.stray_close", token=self._close)
                return
            self._depth -= 1
            if self._depth == 0:
                log.debug("block.end")
                if self._next is not None:
                    self._next.on_block_end()
            return

        self.commands += 1
        self._forward(command)
