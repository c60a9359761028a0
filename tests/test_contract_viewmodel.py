from __future__ import annotations

import datetime as dt
import unittest

from rescal.viewmodel import CalendarViewModel

RESOURCES = [
    {"id": "r1", "title": "Resource A"},
    {"id": "r2", "title": "Resource B"},
    {"id": "r3", "title": "Resource C"},
]
EVENTS = [
    {"id": "e1", "title": "Task 1", "start": "2024-01-10T09:00", "end": "2024-01-10T11:00", "resourceId": "r1"},
    {"id": "e2", "title": "Task 2", "start": "2024-01-11", "end": "2024-01-13", "resourceId": "r2"},
    {"id": "e3", "title": "Unassigned", "start": "2024-01-12"},
]


def _vm(**kw) -> CalendarViewModel:
    kw.setdefault("active_date", "2024-01-10")
    kw.setdefault("view", "week")
    kw.setdefault("config", {"tz": "UTC"})
    return CalendarViewModel(RESOURCES, EVENTS, **kw)


class TestViewModelContract(unittest.TestCase):
    def test_sections_and_positions(self) -> None:
        vm = _vm()
        self.assertEqual(vm.active_date, dt.date(2024, 1, 10))
        (week,) = vm.sections
        self.assertEqual(week.start, dt.date(2024, 1, 8))
        got = {p.event.id: (p.start_column, p.end_column, p.row_index) for p in vm.positioned(week)}
        self.assertEqual(got, {"e1": (2, 3, 0), "e2": (3, 5, 1)})
        self.assertEqual(vm.title, "Jan 10, 2024")

    def test_navigation(self) -> None:
        vm = _vm()
        self.assertEqual(vm.go_next(), dt.date(2024, 1, 17))
        self.assertEqual(vm.go_prev(), dt.date(2024, 1, 10))
        vm.set_view("month")
        self.assertEqual(vm.go_next(), dt.date(2024, 2, 10))
        self.assertEqual(vm.title, "February 2024")
        vm.set_view("year")
        self.assertEqual(len(vm.sections), 12)
        self.assertEqual(vm.title, "2024")
        self.assertIsInstance(vm.go_today(), dt.date)

    def test_unknown_view_and_bad_date_raise(self) -> None:
        vm = _vm()
        with self.assertRaises(ValueError):
            vm.set_view("fortnight")
        with self.assertRaises(ValueError):
            vm.set_active_date("someday")

    def test_recomputation_is_cached_by_content(self) -> None:
        vm = _vm()
        first = vm.normalized_events
        self.assertIs(vm.normalized_events, first)
        self.assertIs(vm.sections, vm.sections)

        vm.set_events([dict(e) for e in EVENTS])
        self.assertIs(vm.normalized_events, first)

        vm.set_events(EVENTS[:1])
        self.assertIsNot(vm.normalized_events, first)
        self.assertEqual(len(vm.normalized_events), 1)

        vm.clear_cache()
        self.assertEqual(len(vm.normalized_events), 1)

    def test_cache_can_be_disabled(self) -> None:
        vm = _vm(config={"tz": "UTC", "cache_size": 0})
        self.assertIsNot(vm.normalized_events, vm.normalized_events)
        self.assertEqual(vm.normalized_events, vm.normalized_events)

    def test_on_resize(self) -> None:
        vm = _vm()
        self.assertEqual(vm.on_resize(240 + 7 * 100), 100.0)
        self.assertEqual(vm.cell_width, 100.0)
        self.assertEqual(vm.on_resize(100), 40.0)

        vm.set_view("year")
        vm.set_active_date(dt.date(2024, 2, 10))
        self.assertEqual(vm.grid_day_count(), 29)
        self.assertEqual(vm.on_resize(240 + 29 * 10), 10.0)

    def test_pointer_gesture_round_trip(self) -> None:
        emitted = []
        vm = _vm(on_reschedule=emitted.append)
        vm.on_resize(240 + 7 * 100)

        self.assertFalse(vm.pointer_down(1, "e3", 0, 0))  # unassigned: never draggable
        self.assertFalse(vm.pointer_down(1, "missing", 0, 0))

        self.assertTrue(vm.pointer_down(1, "e1", 250, 10))
        vm.pointer_move(1, 450, 45)
        (week,) = vm.sections
        pv = vm.preview(week)
        assert pv is not None
        self.assertEqual((pv.row_index, pv.offset_px), (1, 200.0))

        updated = vm.pointer_up(1)
        assert updated is not None
        self.assertEqual(updated["start"], dt.date(2024, 1, 12))
        self.assertEqual(updated["end"], dt.date(2024, 1, 13))
        self.assertEqual(updated["resourceId"], "r2")
        self.assertEqual(emitted, [updated])
        self.assertIsNone(vm.preview(week))

    def test_event_with_unusable_start_only_hides_itself(self) -> None:
        events = EVENTS + [{"id": "bad", "title": "Broken", "start": "not a date", "resourceId": "r1"}]
        vm = CalendarViewModel(RESOURCES, events, active_date="2024-01-10", view="month", config={"tz": "UTC"})
        ((month, positioned),) = vm.visible()
        self.assertEqual([p.event.id for p in positioned], ["e1", "e2"])
        bad = vm.find_event("bad")
        assert bad is not None
        self.assertFalse(bad.valid)
        self.assertFalse(vm.pointer_down(1, "bad", 0, 0))

    def test_pointer_down_accepts_non_string_ids(self) -> None:
        raw = {"id": 7, "title": "Numbered", "start": "2024-01-09", "resourceId": "r3"}
        vm = CalendarViewModel(RESOURCES, [raw], active_date="2024-01-10", view="week", config={"tz": "UTC"})
        vm.on_resize(240 + 7 * 100)
        self.assertTrue(vm.pointer_down(1, 7, 0, 85))
        updated = vm.pointer_up(1)
        assert updated is not None
        self.assertEqual(updated["id"], 7)
        self.assertEqual(updated["resourceId"], "r3")

    def test_pointer_cancel(self) -> None:
        emitted = []
        vm = _vm(on_reschedule=emitted.append)
        vm.pointer_down(3, "e2", 0, 50)
        self.assertTrue(vm.pointer_cancel(3))
        self.assertIsNone(vm.pointer_up(3))
        self.assertEqual(emitted, [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
