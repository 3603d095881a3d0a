"""Date and time literal parsing.

Commands use exactly two literal shapes: ``YYYY-MM-DD`` for dates and
``YYYY-MM-DDTHH:MM`` (24-hour, no seconds) for date-times.
"""
from __future__ import annotations

import datetime as _dt
import re
from typing import FrozenSet

from .constants import DATE_PATTERN, DATETIME_PATTERN, FMT_DATE, FMT_DATETIME, WEEKDAY_LETTERS
from .errors import DateParseError, InvalidWeekdayError

__all__ = [
    "format_instant",
    "next_midnight",
    "parse_date",
    "parse_datetime",
    "parse_weekdays",
    "start_of_day",
]


_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_DATETIME_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")


def parse_date(literal: str) -> _dt.date:
    """Parse ``YYYY-MM-DD``; raises DateParseError naming the literal."""
    text = (literal or "").strip()
    if not _DATE_RE.fullmatch(text):
        raise DateParseError(text, DATE_PATTERN)
    try:
        return _dt.datetime.strptime(text, FMT_DATE).date()
    except ValueError:
        raise DateParseError(text, DATE_PATTERN) from None


def parse_datetime(literal: str) -> _dt.datetime:
    """Parse ``YYYY-MM-DDTHH:MM``; raises DateParseError naming the literal."""
    text = (literal or "").strip()
    if not _DATETIME_RE.fullmatch(text):
        raise DateParseError(text, DATETIME_PATTERN)
    try:
        return _dt.datetime.strptime(text, FMT_DATETIME)
    except ValueError:
        raise DateParseError(text, DATETIME_PATTERN) from None


def start_of_day(d: _dt.date) -> _dt.datetime:
    return _dt.datetime(d.year, d.month, d.day)


def next_midnight(d: _dt.date) -> _dt.datetime:
    return start_of_day(d) + _dt.timedelta(days=1)


def format_instant(v: _dt.datetime) -> str:
    """Render an instant the way commands spell it (``YYYY-MM-DDTHH:MM``)."""
    return v.strftime(FMT_DATETIME)


def parse_weekdays(letters: str) -> FrozenSet[int]:
    """Map weekday letters to ``datetime.weekday()`` values.

    Examples:
        'MTWRF' -> {0, 1, 2, 3, 4}
        'SU' -> {5, 6}
    """
    days = set()
    for ch in (letters or "").strip().upper():
        if ch not in WEEKDAY_LETTERS:
            raise InvalidWeekdayError(ch)
        days.add(WEEKDAY_LETTERS[ch])
    return frozenset(days)
