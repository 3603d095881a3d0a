"""In-memory event store.

Events are kept sorted by start time. Sorting is stable, so events with the
same start keep their insertion order. Overlap is checked only when an event
is inserted; edits may freely create overlaps.
"""
from __future__ import annotations

import datetime as _dt
import logging
from typing import Callable, Iterator, List

from .errors import SchedulingConflictError
from .model import EDITABLE_PROPERTIES, CalendarEvent

LOG = logging.getLogger(__name__)


class EventStore:
    """Ordered collection of CalendarEvent objects."""

    def __init__(self) -> None:
        self._events: List[CalendarEvent] = []

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[CalendarEvent]:
        return iter(list(self._events))

    @property
    def events(self) -> List[CalendarEvent]:
        """Snapshot of the events in start order."""
        return list(self._events)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def conflicts_for(self, event: CalendarEvent) -> List[CalendarEvent]:
        """Existing events overlapping ``event``, in store order."""
        return [other for other in self._events if event.conflicts_with(other)]

    def insert(self, event: CalendarEvent, auto_decline: bool = False) -> List[CalendarEvent]:
        """Add ``event`` and return the events it overlaps.

        With ``auto_decline`` the first overlap raises SchedulingConflictError
        and the event is not added. Otherwise overlaps are returned so the
        caller can warn about each one.
        """
        conflicts = self.conflicts_for(event)
        if conflicts and auto_decline:
            LOG.debug("declined %r: overlaps %r", event.name, conflicts[0].name)
            raise SchedulingConflictError(conflicts[0])
        self._events.append(event)
        self._events.sort(key=lambda e: e.start)
        LOG.debug("inserted %r at %s (%d conflicts)", event.name, event.start, len(conflicts))
        return conflicts

    def _apply_edit(self, matches: Callable[[CalendarEvent], bool], prop: str, value: str) -> int:
        changed = 0
        for event in self._events:
            if matches(event) and event.set_property(prop, value):
                changed += 1
        if changed == 0 and prop.strip().lower() not in EDITABLE_PROPERTIES:
            LOG.debug("ignored edit of unknown property %r", prop)
        return changed

    def edit_one(self, prop: str, name: str, start: _dt.datetime, end: _dt.datetime, value: str) -> bool:
        """Edit the event matching name, start and end exactly. False if none was changed."""
        for event in self._events:
            if event.name == name and event.start == start and event.end == end:
                if event.set_property(prop, value):
                    return True
        return False

    def edit_from_start(self, prop: str, name: str, start: _dt.datetime, value: str) -> int:
        """Edit every event named ``name`` starting at or after ``start``."""
        return self._apply_edit(lambda e: e.name == name and e.start >= start, prop, value)

    def edit_by_name(self, prop: str, name: str, value: str) -> int:
        """Edit every event named ``name``."""
        return self._apply_edit(lambda e: e.name == name, prop, value)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query_on(self, day: _dt.date) -> List[CalendarEvent]:
        return [e for e in self._events if e.occurs_on(day)]

    def query_range(self, start: _dt.datetime, end: _dt.datetime) -> List[CalendarEvent]:
        """Events overlapping ``(start, end)``; events only touching a bound are excluded."""
        return [e for e in self._events if e.start < end and e.end > start]

    def is_busy_at(self, instant: _dt.datetime) -> bool:
        return any(e.covers(instant) for e in self._events)
