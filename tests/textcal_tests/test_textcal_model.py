import datetime as _dt
import unittest

from textcal.errors import InvalidEventError
from textcal.model import CalendarEvent, parse_bool
from tests.fixtures import dt, make_event


class TestConflicts(unittest.TestCase):
    def test_overlapping_events_conflict_both_ways(self):
        a = make_event("A", "2025-03-01T10:00", "2025-03-01T11:00")
        b = make_event("B", "2025-03-01T10:30", "2025-03-01T11:30")
        self.assertTrue(a.conflicts_with(b))
        self.assertTrue(b.conflicts_with(a))

    def test_disjoint_events_do_not_conflict(self):
        a = make_event("A", "2025-03-01T10:00", "2025-03-01T11:00")
        b = make_event("B", "2025-03-01T12:00", "2025-03-01T13:00")
        self.assertFalse(a.conflicts_with(b))
        self.assertFalse(b.conflicts_with(a))

    def test_touching_boundaries_do_not_conflict(self):
        a = make_event("A", "2025-03-01T10:00", "2025-03-01T11:00")
        b = make_event("B", "2025-03-01T11:00", "2025-03-01T12:00")
        self.assertFalse(a.conflicts_with(b))
        self.assertFalse(b.conflicts_with(a))

    def test_containment_conflicts(self):
        outer = CalendarEvent.on_day("Holiday", _dt.date(2025, 3, 1))
        inner = make_event("Call", "2025-03-01T09:00", "2025-03-01T09:30")
        self.assertTrue(outer.conflicts_with(inner))
        self.assertTrue(inner.conflicts_with(outer))


class TestConstruction(unittest.TestCase):
    def test_all_day_spans_to_next_midnight(self):
        ev = CalendarEvent.on_day("Holiday", _dt.date(2025, 3, 5))
        self.assertTrue(ev.all_day)
        self.assertEqual(ev.start, dt("2025-03-05T00:00"))
        self.assertEqual(ev.end, dt("2025-03-06T00:00"))

    def test_defaults(self):
        ev = make_event("A", "2025-03-01T10:00", "2025-03-01T11:00")
        self.assertEqual(ev.description, "")
        self.assertEqual(ev.location, "")
        self.assertTrue(ev.public)
        self.assertFalse(ev.all_day)

    def test_end_must_follow_start(self):
        with self.assertRaises(InvalidEventError):
            make_event("A", "2025-03-01T11:00", "2025-03-01T11:00")

    def test_name_required(self):
        with self.assertRaises(InvalidEventError):
            make_event("  ", "2025-03-01T10:00", "2025-03-01T11:00")


class TestDescribe(unittest.TestCase):
    def test_all_day_with_description_and_location(self):
        ev = CalendarEvent.on_day("Holiday", _dt.date(2025, 3, 1))
        ev.description = "Family trip"
        ev.location = "Beach"
        self.assertEqual(str(ev), "Holiday (All Day on 2025-03-01), Description: Family trip, Location: Beach, Public")

    def test_timed_without_extras(self):
        ev = make_event("Meeting", "2025-03-01T10:00", "2025-03-01T11:00", public=False)
        self.assertEqual(str(ev), "Meeting from 2025-03-01 10:00 to 2025-03-01 11:00, Private")


class TestSetProperty(unittest.TestCase):
    def setUp(self):
        self.ev = make_event("Meeting", "2025-03-01T10:00", "2025-03-01T11:00")

    def test_known_properties(self):
        self.assertTrue(self.ev.set_property("name", "Standup"))
        self.assertTrue(self.ev.set_property("Description", "Daily"))
        self.assertTrue(self.ev.set_property("location", "Room 4"))
        self.assertTrue(self.ev.set_property("PUBLIC", "FALSE"))
        self.assertEqual(
            (self.ev.name, self.ev.description, self.ev.location, self.ev.public),
            ("Standup", "Daily", "Room 4", False),
        )

    def test_unknown_property_changes_nothing(self):
        before = (self.ev.name, self.ev.description, self.ev.location, self.ev.public)
        self.assertFalse(self.ev.set_property("colour", "red"))
        self.assertEqual(before, (self.ev.name, self.ev.description, self.ev.location, self.ev.public))

    def test_parse_bool(self):
        self.assertTrue(parse_bool("True"))
        self.assertTrue(parse_bool(" true "))
        self.assertFalse(parse_bool("false"))
        self.assertFalse(parse_bool("yes"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
