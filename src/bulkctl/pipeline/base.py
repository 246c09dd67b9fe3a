"""The capability shared by every pipeline stage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bulkctl.domain.command import Command


class CommandProcessor(ABC):
    """One link in the processing chain.

    Each stage holds at most one non-owning reference to the next stage,
    assigned once at construction.  Stages forward to it when it is set
    and stop the chain otherwise.

    Only :meth:`process_command` is mandatory; the block hooks are no-ops
    unless a stage cares about block boundaries.
    """

    def __init__(self, next_stage: CommandProcessor | None = None) -> None:
        self._next = next_stage

    @property
    def next_stage(self) -> CommandProcessor | None:
        return self._next

    @abstractmethod
    def process_command(self, command: Command) -> None:
        """Handle one command."""

    def on_block_start(self) -> None:  # noqa: B027
        """Called when the outermost block opens."""

    def on_block_end(self) -> None:  # noqa: B027
        """Called when the outermost block closes."""

    def _forward(self, command: Command) -> None:
        if self._next is not None:
            self._next.process_command(command)
