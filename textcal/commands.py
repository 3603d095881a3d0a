"""Typed commands produced by the grammar."""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import Optional, Union

from .recurrence import RecurrenceRule


@dataclass(frozen=True)
class CreateTimed:
    name: str
    start: _dt.datetime
    end: _dt.datetime
    rule: Optional[RecurrenceRule] = None
    auto_decline: bool = False


@dataclass(frozen=True)
class CreateAllDay:
    name: str
    day: _dt.date
    rule: Optional[RecurrenceRule] = None
    auto_decline: bool = False


@dataclass(frozen=True)
class EditSingle:
    prop: str
    name: str
    start: _dt.datetime
    end: _dt.datetime
    value: str


@dataclass(frozen=True)
class EditManyFromStart:
    prop: str
    name: str
    start: _dt.datetime
    value: str


@dataclass(frozen=True)
class EditManyByName:
    prop: str
    name: str
    value: str


@dataclass(frozen=True)
class QueryOn:
    day: _dt.date


@dataclass(frozen=True)
class QueryRange:
    start: _dt.datetime
    end: _dt.datetime


@dataclass(frozen=True)
class ExportCsv:
    path: str


@dataclass(frozen=True)
class ExportGoogleCsv:
    path: str


@dataclass(frozen=True)
class ShowStatus:
    at: _dt.datetime


Command = Union[
    CreateTimed,
    CreateAllDay,
    EditSingle,
    EditManyFromStart,
    EditManyByName,
    QueryOn,
    QueryRange,
    ExportCsv,
    ExportGoogleCsv,
    ShowStatus,
]
