"""Command interpreter.

One line flows through a processor/producer pair: ``CommandProcessor``
parses it and applies it to the ``EventStore``, returning an envelope;
``CommandProducer`` writes the outcome (or the error) to the output sink.
A failing command never affects the commands after it.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from core.cli_output import OutputWriter
from core.pipeline import BaseProducer, ResultEnvelope, SafeProcessor

from .commands import (
    Command,
    CreateAllDay,
    CreateTimed,
    EditManyByName,
    EditManyFromStart,
    EditSingle,
    ExportCsv,
    ExportGoogleCsv,
    QueryOn,
    QueryRange,
    ShowStatus,
)
from .dates import format_instant, next_midnight, start_of_day
from .errors import ExportError
from .exporters import write_csv, write_google_csv
from .grammar import parse_command
from .model import CalendarEvent
from .recurrence import expand_occurrences
from .store import EventStore

LOG = logging.getLogger(__name__)


@dataclass
class CommandOutcome:
    """What a command did.

    ``value`` carries the typed result: created events, matched events for
    queries, an updated count or found flag for edits, the busy flag for
    status checks, or the written path for exports.
    """

    command: Command
    lines: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    value: Any = None


class CommandProcessor(SafeProcessor[str, CommandOutcome]):
    """Parse a line and apply it to the store with automatic error handling."""

    def __init__(self, store: EventStore, auto_decline: bool = False) -> None:
        self.store = store
        self.auto_decline = auto_decline
        self._handlers: Dict[type, Callable[[Any], CommandOutcome]] = {
            CreateTimed: self._create_timed,
            CreateAllDay: self._create_all_day,
            EditSingle: self._edit_single,
            EditManyFromStart: self._edit_from_start,
            EditManyByName: self._edit_by_name,
            QueryOn: self._query_on,
            QueryRange: self._query_range,
            ExportCsv: self._export_csv,
            ExportGoogleCsv: self._export_google_csv,
            ShowStatus: self._show_status,
        }

    def _process_safe(self, payload: str) -> CommandOutcome:
        return self.apply(parse_command(payload))

    def apply(self, command: Command) -> CommandOutcome:
        """Run an already-parsed command; raises on failure."""
        return self._handlers[type(command)](command)

    # ------------------------------------------------------------------
    # create
    # ------------------------------------------------------------------

    def _insert_all(self, events: List[CalendarEvent], auto_decline: bool, outcome: CommandOutcome) -> None:
        # No rollback: occurrences inserted before a declined one stay
        for ev in events:
            for other in self.store.insert(ev, auto_decline=auto_decline or self.auto_decline):
                outcome.warnings.append(f"Event conflicts with {other.name}")

    def _create_timed(self, cmd: CreateTimed) -> CommandOutcome:
        outcome = CommandOutcome(command=cmd)
        if cmd.rule is None:
            event = CalendarEvent(name=cmd.name, start=cmd.start, end=cmd.end)
            self._insert_all([event], cmd.auto_decline, outcome)
            outcome.value = [event]
            outcome.lines.append(f"Event created: {event}")
            return outcome
        # Validates start < end before expanding
        CalendarEvent(name=cmd.name, start=cmd.start, end=cmd.end)
        occurrences = expand_occurrences(cmd.name, cmd.start, cmd.end, cmd.rule, all_day=False)
        self._insert_all(occurrences, cmd.auto_decline, outcome)
        outcome.value = occurrences
        outcome.lines.append(f"Recurring event created with {len(occurrences)} occurrences.")
        return outcome

    def _create_all_day(self, cmd: CreateAllDay) -> CommandOutcome:
        outcome = CommandOutcome(command=cmd)
        if cmd.rule is None:
            event = CalendarEvent.on_day(cmd.name, cmd.day)
            self._insert_all([event], cmd.auto_decline, outcome)
            outcome.value = [event]
            outcome.lines.append(f"All-day event created: {event}")
            return outcome
        occurrences = expand_occurrences(
            cmd.name, start_of_day(cmd.day), next_midnight(cmd.day), cmd.rule, all_day=True
        )
        self._insert_all(occurrences, cmd.auto_decline, outcome)
        outcome.value = occurrences
        outcome.lines.append(f"Recurring all-day event created with {len(occurrences)} occurrences.")
        return outcome

    # ------------------------------------------------------------------
    # edit
    # ------------------------------------------------------------------

    def _edit_single(self, cmd: EditSingle) -> CommandOutcome:
        found = self.store.edit_one(cmd.prop, cmd.name, cmd.start, cmd.end, cmd.value)
        line = "Event updated successfully." if found else "Event not found or update failed."
        return CommandOutcome(command=cmd, lines=[line], value=found)

    def _edit_from_start(self, cmd: EditManyFromStart) -> CommandOutcome:
        count = self.store.edit_from_start(cmd.prop, cmd.name, cmd.start, cmd.value)
        line = f"{count} event(s) updated starting from {format_instant(cmd.start)}"
        return CommandOutcome(command=cmd, lines=[line], value=count)

    def _edit_by_name(self, cmd: EditManyByName) -> CommandOutcome:
        count = self.store.edit_by_name(cmd.prop, cmd.name, cmd.value)
        return CommandOutcome(command=cmd, lines=[f"{count} event(s) updated with new {cmd.prop}"], value=count)

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    @staticmethod
    def _listing(events: List[CalendarEvent], empty: str, heading: str) -> List[str]:
        if not events:
            return [empty]
        return [heading] + [f" - {ev}" for ev in events]

    def _query_on(self, cmd: QueryOn) -> CommandOutcome:
        events = self.store.query_on(cmd.day)
        day = cmd.day.isoformat()
        lines = self._listing(events, f"No events found on {day}", f"Events on {day}:")
        return CommandOutcome(command=cmd, lines=lines, value=events)

    def _query_range(self, cmd: QueryRange) -> CommandOutcome:
        events = self.store.query_range(cmd.start, cmd.end)
        span = f"{format_instant(cmd.start)} and {format_instant(cmd.end)}"
        lines = self._listing(events, f"No events found between {span}", f"Events between {span}:")
        return CommandOutcome(command=cmd, lines=lines, value=events)

    def _show_status(self, cmd: ShowStatus) -> CommandOutcome:
        busy = self.store.is_busy_at(cmd.at)
        line = f"Status at {format_instant(cmd.at)}: {'Busy' if busy else 'Available'}"
        return CommandOutcome(command=cmd, lines=[line], value=busy)

    # ------------------------------------------------------------------
    # export
    # ------------------------------------------------------------------

    def _export_csv(self, cmd: ExportCsv) -> CommandOutcome:
        try:
            written = write_csv(self.store.events, cmd.path)
        except OSError as exc:
            raise ExportError(f"Could not export CSV to {cmd.path}: {exc}") from exc
        return CommandOutcome(command=cmd, lines=[f"Exported to CSV: {written}"], value=written)

    def _export_google_csv(self, cmd: ExportGoogleCsv) -> CommandOutcome:
        try:
            written = write_google_csv(self.store.events, cmd.path)
        except OSError as exc:
            raise ExportError(f"Could not export Google CSV to {cmd.path}: {exc}") from exc
        return CommandOutcome(command=cmd, lines=[f"Exported to Google CSV: {written}"], value=written)


class CommandProducer(BaseProducer):
    """Write a command outcome to the output sink."""

    def _produce_success(self, payload: CommandOutcome, diagnostics: Optional[Dict[str, Any]]) -> None:
        for warning in payload.warnings:
            self.writer.print_warning(warning)
        self.writer.print_lines(payload.lines)


class CommandInterpreter:
    """Runs command lines against one EventStore and reports to one sink."""

    def __init__(
        self,
        store: Optional[EventStore] = None,
        writer: Optional[OutputWriter] = None,
        *,
        auto_decline: bool = False,
    ) -> None:
        self.store = store if store is not None else EventStore()
        self.writer = writer or OutputWriter()
        self.processor = CommandProcessor(self.store, auto_decline=auto_decline)
        self.producer = CommandProducer(self.writer)

    def execute(self, line: str) -> ResultEnvelope[CommandOutcome]:
        """Process one line and write its output; never raises for command errors."""
        LOG.debug("execute %r", line)
        envelope = self.processor.process(line)
        self.producer.produce(envelope)
        return envelope
