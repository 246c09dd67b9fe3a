"""Pipeline stages and assembly.

The chain is fixed: ``BlockFramer -> BatchProcessor -> ConsoleSink ->
FileLogSink``.  Every stage implements :class:`CommandProcessor`.
"""

from bulkctl.pipeline.assembly import Pipeline, build_pipeline, run_pipeline
from bulkctl.pipeline.base import CommandProcessor
from bulkctl.pipeline.batching import BatchProcessor
from bulkctl.pipeline.framing import BlockFramer
from bulkctl.pipeline.sinks import ConsoleSink, FileLogSink
from bulkctl.pipeline.source import read_commands

__all__ = [
    "BatchProcessor",
    "BlockFramer",
    "CommandProcessor",
    "ConsoleSink",
    "FileLogSink",
    "Pipeline",
    "build_pipeline",
    "read_commands",
    "run_pipeline",
]
