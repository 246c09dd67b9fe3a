"""Pipeline assembly: wires the fixed chain and drives it from a stream.

Ownership: :class:`Pipeline` owns every stage.  Stages only hold
non-owning references to their successor, assigned once here.

Teardown is explicit.  Leaving the ``with`` block always closes the
batching stage, which performs the terminal flush, even when feeding
raised.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime
from types import TracebackType
from typing import IO

import structlog

from bulkctl.config.models import LogFileConfig, PipelineConfig
from bulkctl.domain.command import Command, utc_now
from bulkctl.pipeline.batching import BatchProcessor
from bulkctl.pipeline.framing import BlockFramer
from bulkctl.pipeline.sinks import ConsoleSink, FileLogSink
from bulkctl.pipeline.source import read_commands
from bulkctl.services.result import RunError, RunResult, RunStats

log = structlog.get_logger(__name__)


class Pipeline:
    """Framing -> Batching -> Console -> FileLog, fed one command at a time."""

    def __init__(
        self,
        framer: BlockFramer,
        batcher: BatchProcessor,
        console: ConsoleSink,
        file_log: FileLogSink | None = None,
    ) -> None:
        self.framer = framer
        self.batcher = batcher
        self.console = console
        self.file_log = file_log

    def feed(self, command: Command) -> None:
        self.framer.process_command(command)

    def feed_all(self, commands: Iterable[Command]) -> None:
        for command in commands:
            self.feed(command)

    def close(self) -> None:
        """Terminal flush.  Idempotent."""
        self.batcher.close()

    def __enter__(self) -> Pipeline:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def stats(self) -> RunStats:
        return RunStats(
            commands=self.framer.commands,
            flushes=self.batcher.flushes,
            files_written=self.file_log.files_written if self.file_log else 0,
            write_failures=self.file_log.write_failures if self.file_log else 0,
            dropped=self.batcher.dropped,
            stray_closers=self.framer.stray_closers,
            max_depth=self.framer.max_depth,
        )

    def result(self, error: RunError | None = None) -> RunResult:
        """Summarize the run; non-fatal anomalies become warnings.

        Passing *error* marks the run as failed.
        """
        stats = self.stats()
        warnings: list[str] = []
        if stats.dropped:
            warnings.append(f"Unterminated block: {stats.dropped} command(s) discarded")
        if stats.stray_closers:
            warnings.append(f"Ignored {stats.stray_closers} unmatched block close token(s)")
        if stats.write_failures:
            warnings.append(f"{stats.write_failures} log file write(s) failed")
        return RunResult(
            ok=error is None, op="run", stats=stats, warnings=warnings, error=error
        )


def build_pipeline(
    bulk_size: int,
    *,
    pipeline: PipelineConfig | None = None,
    log_file: LogFileConfig | None = None,
    stream: IO[str] | None = None,
) -> Pipeline:
    """Construct and wire the stages, sinks first.

    Raises:
        ValueError: If *bulk_size* is not positive.
    """
    pipeline = pipeline or PipelineConfig()
    log_file = log_file or LogFileConfig()

    file_sink: FileLogSink | None = None
    if log_file.enabled:
        file_sink = FileLogSink(
            directory=log_file.directory,
            prefix=log_file.prefix,
            suffix=log_file.suffix,
            granularity=log_file.granularity,
        )
    console = ConsoleSink(file_sink, stream=stream)
    batcher = BatchProcessor(bulk_size, console)
    framer = BlockFramer(
        batcher,
        open_token=pipeline.open_token,
        close_token=pipeline.close_token,
    )
    log.debug(
        "pipeline.built",
        bulk_size=bulk_size,
        file_log=str(file_sink.directory) if file_sink else None,
    )
    return Pipeline(framer, batcher, console, file_sink)


def run_pipeline(
    lines: Iterable[str],
    bulk_size: int,
    *,
    pipeline: PipelineConfig | None = None,
    log_file: LogFileConfig | None = None,
    stream: IO[str] | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> RunResult:
    """Feed every line through a fresh pipeline until the input is exhausted.

    An I/O or decode error while reading or echoing ends the run early.
    The terminal flush still happens and the result carries the error.
    """
    pipeline = pipeline or PipelineConfig()
    chain = build_pipeline(bulk_size, pipeline=pipeline, log_file=log_file, stream=stream)
    error: RunError | None = None
    try:
        with chain:
            chain.feed_all(read_commands(lines, clock=clock, skip_blank=pipeline.skip_blank))
    except (OSError, UnicodeError) as exc:
        log.error("pipeline.io_failed", error=str(exc), exc_type=type(exc).__name__)
        error = RunError(
            code="IO_ERROR",
            message=str(exc) or type(exc).__name__,
            detail={"exc_type": type(exc).__name__},
        )
    result = chain.result(error)
    log.debug("pipeline.finished", **result.stats.model_dump())
    return result
