"""Shared pytest fixtures and test helpers for bulkctl tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from click.testing import CliRunner

from bulkctl.domain.command import Command
from bulkctl.pipeline.base import CommandProcessor

T0 = datetime(2024, 3, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Generator[None]:
    """CLI invocations reconfigure logging; undo it after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def ticking_clock() -> Callable[[], datetime]:
    """Clock advancing one second per call, starting at ``T0``."""
    ticks = iter(range(1_000_000))
    return lambda: T0 + timedelta(seconds=next(ticks))


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory so log files and config stay isolated."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BULKCTL_CONFIG", raising=False)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


class Recorder(CommandProcessor):
    """Terminal stage that records every call it receives."""

    def __init__(self) -> None:
        super().__init__()
        self.commands: list[Command] = []
        self.events: list[str] = []

    @property
    def texts(self) -> list[str]:
        return [c.text for c in self.commands]

    def process_command(self, command: Command) -> None:
        self.commands.append(command)
        self.events.append(f"cmd:{command.text}")

    def on_block_start(self) -> None:
        self.events.append("start")

    def on_block_end(self) -> None:
        self.events.append("end")


def commands(*texts: str) -> Iterator[Command]:
    """Commands stamped one second apart starting at ``T0``."""
    for i, text in enumerate(texts):
        yield Command(text=text, timestamp=T0 + timedelta(seconds=i))
