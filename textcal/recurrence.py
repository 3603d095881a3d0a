"""Recurrence rules and occurrence expansion.

A rule is ``<weekday-letters> for <N> times`` or ``<weekday-letters> until
<literal>``. Expansion walks one calendar day at a time from the template
start, emitting an occurrence on every matching weekday.
"""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence

from .dates import next_midnight, parse_date, parse_datetime, parse_weekdays
from .errors import RecurrenceFormatError
from .model import CalendarEvent

_ONE_DAY = _dt.timedelta(days=1)
_ONE_SECOND = _dt.timedelta(seconds=1)


@dataclass(frozen=True)
class RecurrenceRule:
    """Weekday set plus exactly one termination mode."""

    weekdays: FrozenSet[int]
    count: Optional[int] = None
    # Exclusive boundary; for all-day rules this is midnight after the until date
    until: Optional[_dt.datetime] = None

    def __post_init__(self) -> None:
        if not self.weekdays:
            raise RecurrenceFormatError("Recurring event needs at least one weekday letter")
        if (self.count is None) == (self.until is None):
            raise RecurrenceFormatError("Recurring event needs either 'for N times' or 'until <date>'")
        if self.count is not None and self.count < 1:
            raise RecurrenceFormatError(f"Occurrence count must be positive, got {self.count}")


def parse_rule(words: Sequence[str], all_day: bool) -> RecurrenceRule:
    """Build a rule from the words following ``repeats``.

    Weekday letters are validated before the rest of the clause so a bad
    letter is reported even when the clause is also malformed.
    """
    if not words:
        raise RecurrenceFormatError("Invalid recurring event format: nothing after 'repeats'")
    weekdays = parse_weekdays(words[0])
    rest = [w.lower() for w in words[1:]]

    if "for" in rest:
        if len(words) < 4 or rest[0] != "for" or rest[2] != "times":
            raise RecurrenceFormatError(
                "Invalid recurring event format (for N times).",
                hint="e.g. repeats MWF for 5 times",
            )
        try:
            count = int(words[2])
        except ValueError:
            raise RecurrenceFormatError(f"Occurrence count is not a number: {words[2]}") from None
        return RecurrenceRule(weekdays=weekdays, count=count)

    if "until" in rest:
        if rest[0] != "until" or len(words) < 3:
            raise RecurrenceFormatError(
                "Invalid recurring event format (until <date>).",
                hint="e.g. repeats TR until 2025-04-01",
            )
        literal = " ".join(words[2:])
        if all_day:
            until = next_midnight(parse_date(literal))
        else:
            until = parse_datetime(literal)
        return RecurrenceRule(weekdays=weekdays, until=until)

    raise RecurrenceFormatError("Invalid recurring event format.", hint="Use 'for N times' or 'until <date>'")


def _make_occurrence(
    name: str, day: _dt.date, template_start: _dt.datetime, duration: _dt.timedelta, all_day: bool
) -> CalendarEvent:
    start = _dt.datetime.combine(day, template_start.time())
    return CalendarEvent(name=name, start=start, end=start + duration, all_day=all_day)


def expand_occurrences(
    name: str,
    template_start: _dt.datetime,
    template_end: _dt.datetime,
    rule: RecurrenceRule,
    all_day: bool = False,
) -> List[CalendarEvent]:
    """Expand a rule into concrete events, in date order.

    Every occurrence keeps the template's time of day and duration. Count mode
    stops after ``rule.count`` occurrences; until mode stops once the walk
    passes ``rule.until`` minus one second (an until before the start yields
    nothing).
    """
    duration = template_end - template_start
    out: List[CalendarEvent] = []
    current = template_start
    if rule.count is not None:
        while len(out) < rule.count:
            if current.weekday() in rule.weekdays:
                out.append(_make_occurrence(name, current.date(), template_start, duration, all_day))
            current = current + _ONE_DAY
        return out

    assert rule.until is not None  # nosec B101 - guaranteed by RecurrenceRule
    last = rule.until - _ONE_SECOND
    while current <= last:
        if current.weekday() in rule.weekdays:
            out.append(_make_occurrence(name, current.date(), template_start, duration, all_day))
        current = current + _ONE_DAY
    return out
