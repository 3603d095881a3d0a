"""Shared test fixtures and utilities."""

from __future__ import annotations

import io
import os
import tempfile
from contextlib import contextmanager, redirect_stdout
from datetime import datetime
from typing import Iterator, Optional, Sequence, Tuple

from core.cli_output import OutputWriter
from textcal.interpreter import CommandInterpreter
from textcal.model import CalendarEvent
from textcal.store import EventStore


def dt(text: str) -> datetime:
    """Parse ``YYYY-MM-DDTHH:MM`` for test readability."""
    return datetime.strptime(text, "%Y-%m-%dT%H:%M")


def make_event(name: str, start: str, end: str, **kwargs) -> CalendarEvent:
    return CalendarEvent(name=name, start=dt(start), end=dt(end), **kwargs)


# -----------------------------------------------------------------------------
# Interpreter helpers
# -----------------------------------------------------------------------------


def make_interpreter(
    store: Optional[EventStore] = None, *, auto_decline: bool = False
) -> Tuple[CommandInterpreter, io.StringIO]:
    """Interpreter writing every line (including warnings/errors) to one buffer."""
    buf = io.StringIO()
    interp = CommandInterpreter(store, OutputWriter.to_stream(buf), auto_decline=auto_decline)
    return interp, buf


def run_commands(interp: CommandInterpreter, lines: Sequence[str]) -> None:
    for line in lines:
        interp.execute(line)


# -----------------------------------------------------------------------------
# File helpers
# -----------------------------------------------------------------------------


class TempDirMixin:
    """Provide ``self.tmpdir`` for the duration of each test."""

    def setUp(self) -> None:  # noqa: D401
        super().setUp()  # type: ignore[misc]
        self._td = tempfile.TemporaryDirectory()
        self.tmpdir = self._td.name

    def tearDown(self) -> None:
        self._td.cleanup()
        super().tearDown()  # type: ignore[misc]


def write_text(path: str, content: str) -> str:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(content)
    return path


def write_yaml(data: dict, dir: Optional[str] = None, filename: str = "config.yaml") -> str:
    """Write a dict to a temporary YAML file, return the path."""
    import yaml

    td = dir or tempfile.mkdtemp()
    p = os.path.join(td, filename)
    with open(p, "w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, sort_keys=False)
    return p


@contextmanager
def capture_stdout() -> Iterator[io.StringIO]:
    """Context manager that captures stdout and yields a StringIO buffer."""
    buf = io.StringIO()
    with redirect_stdout(buf):
        yield buf
