"""CSV export dialects and the custom-format reader.

Custom format::

    EventName,Start,End,AllDay,Description,Location,Public
    "Standup",2025-03-03 09:00,2025-03-03 09:15,false,"","Room 4",true

Text columns are always quoted while timestamps and booleans never are, a
per-column rule ``csv.writer`` quoting modes cannot express, so custom rows
are assembled with ``_quoted``.

Google Calendar import format uses ``MM/DD/YYYY`` dates, ``hh:mm AM/PM``
times, blank times for all-day rows, and a ``Private`` column that is the
negation of the event's public flag. It is written with ``csv.writer``.
"""
from __future__ import annotations

import csv
import datetime as _dt
from pathlib import Path
from typing import Iterable, List, Union

from .constants import CSV_HEADER, FMT_DISPLAY, FMT_GOOGLE_DATE, FMT_GOOGLE_TIME, GOOGLE_CSV_HEADER
from .model import CalendarEvent, parse_bool

PathLike = Union[str, Path]


def _quoted(text: str) -> str:
    return '"' + (text or "").replace('"', '""') + '"'


def _bool_literal(value: bool) -> str:
    return "true" if value else "false"


def custom_csv_rows(events: Iterable[CalendarEvent]) -> List[str]:
    lines = [",".join(CSV_HEADER)]
    for ev in events:
        lines.append(",".join([
            _quoted(ev.name),
            ev.start.strftime(FMT_DISPLAY),
            ev.end.strftime(FMT_DISPLAY),
            _bool_literal(ev.all_day),
            _quoted(ev.description),
            _quoted(ev.location),
            _bool_literal(ev.public),
        ]))
    return lines


def google_csv_rows(events: Iterable[CalendarEvent]) -> List[List[str]]:
    """Header plus one row per event, as cell lists for ``csv.writer``."""
    rows = [list(GOOGLE_CSV_HEADER)]
    for ev in events:
        if ev.all_day:
            day = ev.start.strftime(FMT_GOOGLE_DATE)
            when = [day, "", day, "", "True"]
        else:
            when = [
                ev.start.strftime(FMT_GOOGLE_DATE),
                ev.start.strftime(FMT_GOOGLE_TIME),
                ev.end.strftime(FMT_GOOGLE_DATE),
                ev.end.strftime(FMT_GOOGLE_TIME),
                "False",
            ]
        rows.append([ev.name] + when + [ev.description, ev.location, "False" if ev.public else "True"])
    return rows


def write_csv(events: Iterable[CalendarEvent], path: PathLike) -> Path:
    """Write the custom CSV; returns the absolute path written. Raises OSError."""
    target = Path(path)
    with open(target, "w", encoding="utf-8", newline="") as fh:
        fh.write("\n".join(custom_csv_rows(events)) + "\n")
    return target.resolve()


def write_google_csv(events: Iterable[CalendarEvent], path: PathLike) -> Path:
    """Write the Google Calendar CSV; returns the absolute path written. Raises OSError."""
    target = Path(path)
    with open(target, "w", encoding="utf-8", newline="") as fh:
        w = csv.writer(fh, lineterminator="\n")
        w.writerows(google_csv_rows(events))
    return target.resolve()


def read_csv(path: PathLike) -> List[CalendarEvent]:
    """Read events back from a custom-format CSV.

    Args:
        path: Path to a file produced by write_csv

    Returns:
        Events in file order
    """
    events: List[CalendarEvent] = []
    with open(path, newline="", encoding="utf-8") as fh:
        rd = csv.DictReader(fh)
        for row in rd:
            events.append(CalendarEvent(
                name=row.get("EventName") or "",
                start=_dt.datetime.strptime(row.get("Start") or "", FMT_DISPLAY),
                end=_dt.datetime.strptime(row.get("End") or "", FMT_DISPLAY),
                all_day=parse_bool(row.get("AllDay") or ""),
                description=row.get("Description") or "",
                location=row.get("Location") or "",
                public=parse_bool(row.get("Public") or ""),
            ))
    return events
