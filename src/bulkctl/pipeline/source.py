"""Lazy sequence of commands read from a text stream."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from datetime import datetime

from bulkctl.domain.command import Command, utc_now


def read_commands(
    lines: Iterable[str],
    *,
    clock: Callable[[], datetime] = utc_now,
    skip_blank: bool = False,
) -> Iterator[Command]:
    """Yield one :class:`Command` per line, stamped when the line is read.

    The trailing ``\\n`` or ``\\r\\n`` is stripped; nothing else is.
    Blank lines are ordinary commands unless *skip_blank* is set.
    """
    for line in lines:
        text = line.removesuffix("\n").removesuffix("\r")
        if skip_blank and not text.strip():
            continue
        yield Command(text=text, timestamp=clock())
