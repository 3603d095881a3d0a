import datetime as _dt
import unittest

from textcal.errors import SchedulingConflictError
from textcal.model import CalendarEvent
from textcal.store import EventStore
from tests.fixtures import dt, make_event


class StoreCase(unittest.TestCase):
    def setUp(self):
        self.store = EventStore()


class TestInsert(StoreCase):
    def test_events_kept_in_start_order(self):
        self.store.insert(make_event("Late", "2025-03-01T15:00", "2025-03-01T16:00"))
        self.store.insert(make_event("Early", "2025-03-01T08:00", "2025-03-01T09:00"))
        self.store.insert(make_event("Mid", "2025-03-01T11:00", "2025-03-01T12:00"))
        self.assertEqual([e.name for e in self.store], ["Early", "Mid", "Late"])

    def test_equal_starts_keep_insertion_order(self):
        self.store.insert(make_event("First", "2025-03-01T10:00", "2025-03-01T11:00"))
        self.store.insert(make_event("Second", "2025-03-01T10:00", "2025-03-01T10:30"))
        self.store.insert(make_event("Third", "2025-03-01T10:00", "2025-03-01T12:00"))
        self.assertEqual([e.name for e in self.store.events], ["First", "Second", "Third"])

    def test_warn_mode_returns_conflicts_and_inserts(self):
        a = make_event("A", "2025-03-01T10:00", "2025-03-01T11:00")
        b = make_event("B", "2025-03-01T10:30", "2025-03-01T10:45")
        self.store.insert(a)
        self.store.insert(b)
        c = make_event("C", "2025-03-01T10:15", "2025-03-01T10:40")
        conflicts = self.store.insert(c)
        self.assertEqual([e.name for e in conflicts], ["A", "B"])
        self.assertEqual(len(self.store), 3)

    def test_auto_decline_rejects_and_leaves_store_untouched(self):
        self.store.insert(make_event("A", "2025-03-01T10:00", "2025-03-01T11:00"))
        with self.assertRaises(SchedulingConflictError) as ctx:
            self.store.insert(make_event("B", "2025-03-01T10:30", "2025-03-01T11:30"), auto_decline=True)
        self.assertEqual(str(ctx.exception.message), "Conflict detected with event: A")
        self.assertEqual(ctx.exception.existing.name, "A")
        self.assertEqual([e.name for e in self.store], ["A"])

    def test_auto_decline_allows_touching_events(self):
        self.store.insert(make_event("A", "2025-03-01T10:00", "2025-03-01T11:00"))
        conflicts = self.store.insert(make_event("B", "2025-03-01T11:00", "2025-03-01T12:00"), auto_decline=True)
        self.assertEqual(conflicts, [])
        self.assertEqual(len(self.store), 2)

    def test_events_property_is_a_snapshot(self):
        self.store.insert(make_event("A", "2025-03-01T10:00", "2025-03-01T11:00"))
        snap = self.store.events
        snap.clear()
        self.assertEqual(len(self.store), 1)


class TestQueries(StoreCase):
    def setUp(self):
        super().setUp()
        self.store.insert(make_event("Standup", "2025-03-03T09:00", "2025-03-03T09:15"))
        self.store.insert(make_event("Overnight", "2025-03-03T22:00", "2025-03-04T02:00"))
        self.store.insert(CalendarEvent.on_day("Holiday", _dt.date(2025, 3, 4)))

    def test_query_on_matches_days_spanned(self):
        self.assertEqual([e.name for e in self.store.query_on(_dt.date(2025, 3, 3))], ["Standup", "Overnight"])
        self.assertEqual([e.name for e in self.store.query_on(_dt.date(2025, 3, 4))], ["Overnight", "Holiday"])
        self.assertEqual(self.store.query_on(_dt.date(2025, 3, 5)), [])

    def test_all_day_event_only_on_its_own_date(self):
        self.store.insert(CalendarEvent.on_day("Trip", _dt.date(2025, 3, 10)))
        self.assertEqual([e.name for e in self.store.query_on(_dt.date(2025, 3, 11))], [])

    def test_query_range_excludes_touching_bounds(self):
        got = self.store.query_range(dt("2025-03-03T09:15"), dt("2025-03-03T22:00"))
        self.assertEqual(got, [])
        got = self.store.query_range(dt("2025-03-03T09:10"), dt("2025-03-03T22:01"))
        self.assertEqual([e.name for e in got], ["Standup", "Overnight"])

    def test_busy_at_start_but_not_at_end(self):
        self.assertTrue(self.store.is_busy_at(dt("2025-03-03T09:00")))
        self.assertFalse(self.store.is_busy_at(dt("2025-03-03T09:15")))
        self.assertTrue(self.store.is_busy_at(dt("2025-03-04T12:00")))
        self.assertFalse(self.store.is_busy_at(dt("2025-03-05T00:00")))


class TestEdits(StoreCase):
    def setUp(self):
        super().setUp()
        for day in (3, 4, 5):
            self.store.insert(make_event("Gym", f"2025-03-0{day}T07:00", f"2025-03-0{day}T08:00"))
        self.store.insert(make_event("Lunch", "2025-03-04T12:00", "2025-03-04T13:00"))

    def test_edit_one_exact_match(self):
        self.assertTrue(self.store.edit_one("location", "Gym", dt("2025-03-04T07:00"), dt("2025-03-04T08:00"), "Pool"))
        self.assertEqual([e.location for e in self.store if e.name == "Gym"], ["", "Pool", ""])

    def test_edit_one_misses_on_wrong_end(self):
        self.assertFalse(self.store.edit_one("location", "Gym", dt("2025-03-04T07:00"), dt("2025-03-04T09:00"), "Pool"))

    def test_edit_from_start_counts_inclusive(self):
        count = self.store.edit_from_start("description", "Gym", dt("2025-03-04T07:00"), "Legs")
        self.assertEqual(count, 2)
        self.assertEqual([e.description for e in self.store if e.name == "Gym"], ["", "Legs", "Legs"])

    def test_edit_by_name(self):
        self.assertEqual(self.store.edit_by_name("public", "Gym", "false"), 3)
        self.assertEqual([e.public for e in self.store if e.name == "Gym"], [False, False, False])
        self.assertTrue(all(e.public for e in self.store if e.name == "Lunch"))

    def test_unknown_property_changes_nothing(self):
        self.assertEqual(self.store.edit_by_name("colour", "Gym", "red"), 0)
        self.assertFalse(self.store.edit_one("colour", "Lunch", dt("2025-03-04T12:00"), dt("2025-03-04T13:00"), "red"))

    def test_rename_then_name_matching_uses_new_name(self):
        self.assertEqual(self.store.edit_by_name("name", "Gym", "Workout"), 3)
        self.assertEqual(self.store.edit_by_name("location", "Gym", "Pool"), 0)
        self.assertEqual(self.store.edit_by_name("location", "Workout", "Pool"), 3)

    def test_edits_may_create_overlaps(self):
        self.store.edit_by_name("name", "Lunch", "Gym")
        self.assertEqual(len(self.store), 4)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
