"""RunResult and RunError — what a pipeline run reports back.

The CLI renders RunResult for humans (Rich) or machines (``--json``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RunError(BaseModel):
    """Structured error payload within a RunResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class RunStats(BaseModel):
    """Counters collected from the stages after a run."""

    model_config = {"frozen": True}

    commands: int = 0
    flushes: int = 0
    files_written: int = 0
    write_failures: int = 0
    dropped: int = 0
    stray_closers: int = 0
    max_depth: int = 0


class RunResult(BaseModel):
    """Outcome of feeding one input stream through the pipeline.

    Attributes:
        ok: Whether the run completed.
        op: Name of the operation (e.g. ``"run"``).
        stats: Stage counters.
        warnings: Non-fatal issues (dropped block, stray closers, failed writes).
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    stats: RunStats = Field(default_factory=RunStats)
    warnings: list[str] = Field(default_factory=list)
    error: RunError | None = None
