"""Command — the immutable unit flowing through the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime


def utc_now() -> datetime:
    """Default clock for newly read commands."""
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class Command:
    """Opaque text payload stamped with its creation time.

    Equality is by value.  The batching stage builds synthetic commands
    carrying the timestamp of the first batched command.
    """

    text: str
    timestamp: datetime = field(default_factory=utc_now)
