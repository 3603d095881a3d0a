"""Formats and fixed tables shared across the calendar package."""
from __future__ import annotations

import os
from typing import Dict, List

# -----------------------------------------------------------------------------
# Date/time literal formats
# -----------------------------------------------------------------------------

FMT_DATE = "%Y-%m-%d"
FMT_DATETIME = "%Y-%m-%dT%H:%M"
FMT_DISPLAY = "%Y-%m-%d %H:%M"

# Human-readable forms used in error messages
DATE_PATTERN = "YYYY-MM-DD"
DATETIME_PATTERN = "YYYY-MM-DDTHH:MM"

# Google Calendar import dialect
FMT_GOOGLE_DATE = "%m/%d/%Y"
FMT_GOOGLE_TIME = "%I:%M %p"

# -----------------------------------------------------------------------------
# Recurrence weekday letters (R = Thursday, U = Sunday)
# -----------------------------------------------------------------------------

WEEKDAY_LETTERS: Dict[str, int] = {
    "M": 0,
    "T": 1,
    "W": 2,
    "R": 3,
    "F": 4,
    "S": 5,
    "U": 6,
}

# -----------------------------------------------------------------------------
# CSV headers
# -----------------------------------------------------------------------------

CSV_HEADER: List[str] = ["EventName", "Start", "End", "AllDay", "Description", "Location", "Public"]

GOOGLE_CSV_HEADER: List[str] = [
    "Subject",
    "Start Date",
    "Start Time",
    "End Date",
    "End Time",
    "All Day Event",
    "Description",
    "Location",
    "Private",
]

# -----------------------------------------------------------------------------
# Settings file lookup
# -----------------------------------------------------------------------------

CONFIG_ENV_VAR = "TEXTCAL_CONFIG"
CONFIG_FILENAME = "config.yaml"


def _config_roots() -> List[str]:
    """Return ordered list of config root directories."""
    roots: List[str] = []
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        roots.append(os.path.expanduser(xdg))
    roots.append(os.path.expanduser("~/.config"))
    return roots


def config_paths() -> List[str]:
    """Return ordered list of settings files to search."""
    paths: List[str] = []
    env_cfg = os.environ.get(CONFIG_ENV_VAR)
    if env_cfg:
        paths.append(os.path.expanduser(env_cfg))
    for root in _config_roots():
        paths.append(os.path.join(root, "textcal", CONFIG_FILENAME))
    seen: set[str] = set()
    unique: List[str] = []
    for p in paths:
        if p not in seen:
            seen.add(p)
            unique.append(p)
    return unique
