"""Text-command calendar.

An in-memory calendar driven by English-like command lines: create (and
repeat) events, edit them by name and time scope, query a day or a range,
check busy status, and export to CSV.
"""

from .interpreter import CommandInterpreter
from .model import CalendarEvent
from .store import EventStore

__all__ = ["CalendarEvent", "CommandInterpreter", "EventStore", "__version__"]
__version__ = "0.1.0"
