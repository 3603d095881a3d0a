"""Calendar error taxonomy.

Grammar and semantic failures abort the current command only; the
interpreter reports them and moves on to the next line.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from core.cli_errors import CLIError, ExitCode

if TYPE_CHECKING:  # pragma: no cover
    from .model import CalendarEvent


class CalendarError(CLIError):
    """Base class for calendar command failures."""

    def __init__(self, message: str, code: ExitCode = ExitCode.ERROR, hint: Optional[str] = None):
        super().__init__(message, code, hint)


class CommandSyntaxError(CalendarError):
    """A command line does not match the grammar."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.USAGE, hint)


class UnknownCommandError(CommandSyntaxError):
    """No verb matches the start of the line."""

    def __init__(self, line: str):
        super().__init__(f"Invalid command: {line}")
        self.line = line


class DateParseError(CommandSyntaxError):
    """A date or date-time literal failed to parse."""

    def __init__(self, literal: str, pattern: str):
        super().__init__(f"Could not parse '{literal}' as {pattern}")
        self.literal = literal
        self.pattern = pattern


class RecurrenceFormatError(CommandSyntaxError):
    """Malformed ``repeats`` clause."""


class InvalidWeekdayError(RecurrenceFormatError):
    def __init__(self, char: str):
        super().__init__(f"Invalid weekday character: {char}", hint="Use M T W R F S U")
        self.char = char


class SchedulingConflictError(CalendarError):
    """Insertion rejected because the new event overlaps an existing one."""

    def __init__(self, existing: "CalendarEvent"):
        super().__init__(f"Conflict detected with event: {existing.name}")
        self.existing = existing


class InvalidEventError(CalendarError):
    """Event fields violate an invariant (e.g. end not after start)."""


class ExportError(CalendarError):
    """Writing an export file failed."""
