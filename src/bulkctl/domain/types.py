"""Enums shared between configuration and the pipeline."""

from __future__ import annotations

from enum import StrEnum


class TickGranularity(StrEnum):
    """Resolution of the epoch ticks embedded in log file names."""

    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"
