"""Terminal stages: echo to the console and persist each bulk to a file."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import IO, TYPE_CHECKING

import click
import structlog

from bulkctl.domain.types import TickGranularity
from bulkctl.pipeline.base import CommandProcessor

if TYPE_CHECKING:
    from bulkctl.domain.command import Command

log = structlog.get_logger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_TICK_UNITS: dict[TickGranularity, timedelta] = {
    TickGranularity.SECONDS: timedelta(seconds=1),
    TickGranularity.MILLISECONDS: timedelta(milliseconds=1),
}


def epoch_ticks(timestamp: datetime, granularity: TickGranularity = TickGranularity.SECONDS) -> int:
    """Whole seconds (or milliseconds) elapsed since the Unix epoch.

    Naive timestamps are taken as local time.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.astimezone()
    return (timestamp - _EPOCH) // _TICK_UNITS[TickGranularity(granularity)]


class ConsoleSink(CommandProcessor):
    """Writes each command's text as one line, then forwards it."""

    def __init__(
        self,
        next_stage: CommandProcessor | None = None,
        *,
        stream: IO[str] | None = None,
    ) -> None:
        super().__init__(next_stage)
        self._stream = stream

    def process_command(self, command: Command) -> None:
        click.echo(command.text, file=self._stream)
        self._forward(command)


class FileLogSink(CommandProcessor):
    """Writes each command's text to its own ``<prefix><ticks><suffix>`` file.

    The file is truncated if it exists; two commands sharing a tick land
    in the same file and the later one wins.  A failed write is logged and
    counted, and the command is still forwarded.
    """

    def __init__(
        self,
        next_stage: CommandProcessor | None = None,
        *,
        directory: Path | None = None,
        prefix: str = "bulk",
        suffix: str = ".log",
        granularity: TickGranularity = TickGranularity.SECONDS,
    ) -> None:
        super().__init__(next_stage)
        self._directory = Path(directory) if directory is not None else Path.cwd()
        self._prefix = prefix
        self._suffix = suffix
        self._granularity = TickGranularity(granularity)
        self.files_written = 0
        self.write_failures = 0

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, command: Command) -> Path:
        """Resolve the log file path derived from *command*'s timestamp."""
        ticks = epoch_ticks(command.timestamp, self._granularity)
        return self._directory / f"{self._prefix}{ticks}{self._suffix}"

    def process_command(self, command: Command) -> None:
        path = self.path_for(command)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as fh:
                fh.write(command.text)
        except OSError:
            self.write_failures += 1
            log.warning("file_log.write_failed", path=str(path), exc_info=True)
        else:
            self.files_written += 1
            log.debug("file_log.written", path=str(path))
        self._forward(command)
