"""Calendar event model."""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass

from .constants import FMT_DISPLAY
from .dates import next_midnight, start_of_day
from .errors import InvalidEventError

# Properties an edit command may set
EDITABLE_PROPERTIES = ("name", "description", "location", "public")


def parse_bool(value: str) -> bool:
    """True only for a case-insensitive ``true``; anything else is False."""
    return (value or "").strip().lower() == "true"


@dataclass
class CalendarEvent:
    """One event. Intervals are half-open: ``[start, end)``."""

    name: str
    start: _dt.datetime
    end: _dt.datetime
    all_day: bool = False
    description: str = ""
    location: str = ""
    public: bool = True

    def __post_init__(self) -> None:
        if not (self.name or "").strip():
            raise InvalidEventError("Event name must not be empty")
        if self.end <= self.start:
            raise InvalidEventError(
                f"Event '{self.name}' must end after it starts "
                f"({self.start.strftime(FMT_DISPLAY)} -> {self.end.strftime(FMT_DISPLAY)})"
            )

    @classmethod
    def on_day(cls, name: str, day: _dt.date) -> "CalendarEvent":
        """All-day event covering midnight of ``day`` to midnight of the next day."""
        return cls(name=name, start=start_of_day(day), end=next_midnight(day), all_day=True)

    def conflicts_with(self, other: "CalendarEvent") -> bool:
        # Touching boundaries (self.end == other.start) is not a conflict
        return self.start < other.end and self.end > other.start

    def covers(self, instant: _dt.datetime) -> bool:
        return self.start <= instant < self.end

    def occurs_on(self, day: _dt.date) -> bool:
        """All-day events match their own date; timed events match any date they span."""
        if self.all_day:
            return self.start.date() == day
        return self.start.date() <= day <= self.end.date()

    def set_property(self, prop: str, value: str) -> bool:
        """Apply an edit. Returns False (and changes nothing) for an unknown property."""
        key = (prop or "").strip().lower()
        if key == "name":
            self.name = value
        elif key == "description":
            self.description = value
        elif key == "location":
            self.location = value
        elif key == "public":
            self.public = parse_bool(value)
        else:
            return False
        return True

    def describe(self) -> str:
        if self.all_day:
            base = f"{self.name} (All Day on {self.start.date().isoformat()})"
        else:
            base = f"{self.name} from {self.start.strftime(FMT_DISPLAY)} to {self.end.strftime(FMT_DISPLAY)}"
        if self.description:
            base += f", Description: {self.description}"
        if self.location:
            base += f", Location: {self.location}"
        base += ", Public" if self.public else ", Private"
        return base

    def __str__(self) -> str:
        return self.describe()
