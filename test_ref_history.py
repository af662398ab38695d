"""Tests for RefHistory undo/redo tracking."""

import itertools
import os
import sys
import threading
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), 'src'))

from PySide6.QtWidgets import QApplication

from reactive_state.models.domain import ReactiveCell, TrackerState
from reactive_state.services.history import RefHistory, SnapshotError
from reactive_state.services.scheduling import ManualScheduler, wait_tick


class TestRefHistoryEventLoop(unittest.TestCase):
    """Behaviour with the default Qt next-tick scheduler."""

    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance()
        if cls.app is None:
            cls.app = QApplication([])

    def test_stores_previous_value(self):
        count = ReactiveCell(0)
        tracker = RefHistory(count)

        count.value += 1
        wait_tick()

        self.assertEqual(tracker.history[0].value, 0)

    def test_does_not_include_current_value(self):
        count = ReactiveCell(0)
        tracker = RefHistory(count)
        self.assertEqual(len(tracker.history), 0)

        count.value += 1
        wait_tick()

        self.assertEqual(len(tracker.history), 1)
        self.assertNotIn(1, [record.value for record in tracker.history])

    def test_newest_first(self):
        count = ReactiveCell(0)
        tracker = RefHistory(count)

        count.value += 1
        wait_tick()
        count.value += 1
        wait_tick()

        self.assertEqual([r.value for r in tracker.history], [1, 0])

    def test_capacity_evicts_oldest(self):
        count = ReactiveCell(0)
        tracker = RefHistory(count, 3)

        for _ in range(4):
            count.value += 1
            wait_tick()

        self.assertEqual(len(tracker.history), 3)
        self.assertEqual(tracker.history[-1].value, 1)

    def test_capacity_cell_truncates_immediately(self):
        cap = ReactiveCell(5)
        count = ReactiveCell(0)
        tracker = RefHistory(count, cap)

        for _ in range(7):
            count.value += 1
            wait_tick()
        self.assertEqual(len(tracker.history), 5)

        cap.value = 3

        self.assertEqual(len(tracker.history), 3)
        self.assertEqual([r.value for r in tracker.history], [6, 5, 4])

    def test_capacity_getter_reconcile(self):
        cap = ReactiveCell(5)
        count = ReactiveCell(0)
        tracker = RefHistory(count, lambda: cap.value)

        for _ in range(7):
            count.value += 1
            wait_tick()
        self.assertEqual(len(tracker.history), 5)

        cap.value = 3
        tracker.reconcile()

        self.assertEqual(len(tracker.history), 3)
        self.assertEqual(tracker.history[-1].value, 4)

    def test_capacity_getter_applied_on_next_change(self):
        cap = ReactiveCell(5)
        count = ReactiveCell(0)
        tracker = RefHistory(count, lambda: cap.value)

        for _ in range(7):
            count.value += 1
            wait_tick()

        cap.value = 3
        count.value += 1
        wait_tick()

        self.assertEqual([r.value for r in tracker.history], [7, 6, 5])

    def test_undo_restores_previous_value(self):
        count = ReactiveCell(0)
        tracker = RefHistory(count)

        count.value += 1
        wait_tick()
        tracker.undo()
        wait_tick()

        self.assertEqual(count.value, 0)

    def test_redo_moves_forward(self):
        count = ReactiveCell(0)
        tracker = RefHistory(count)

        count.value += 1
        wait_tick()
        tracker.undo()
        wait_tick()
        tracker.redo()
        wait_tick()

        self.assertEqual(count.value, 1)

    def test_undo_write_is_not_recorded(self):
        count = ReactiveCell(0)
        tracker = RefHistory(count)

        count.value += 1
        wait_tick()
        tracker.undo()
        wait_tick()

        self.assertEqual(tracker.history, ())
        self.assertEqual([r.value for r in tracker.future], [1])

        tracker.redo()
        wait_tick()

        self.assertEqual([r.value for r in tracker.history], [0])
        self.assertEqual(tracker.future, ())

    def test_state_returns_to_idle_after_tick(self):
        count = ReactiveCell(0)
        tracker = RefHistory(count)

        count.value = 1
        tracker.undo()
        self.assertIs(tracker.state, TrackerState.SUPPRESSING_UNDO)

        wait_tick()
        self.assertIs(tracker.state, TrackerState.IDLE)

    def test_organic_change_clears_future(self):
        count = ReactiveCell(0)
        tracker = RefHistory(count)

        count.value = 1
        wait_tick()
        count.value = 2
        wait_tick()
        tracker.undo()
        wait_tick()
        self.assertTrue(tracker.can_redo())

        count.value = 5
        wait_tick()

        self.assertFalse(tracker.can_redo())
        self.assertEqual([r.value for r in tracker.history], [1, 0])


class TestRefHistoryManualTicks(unittest.TestCase):
    """Deterministic behaviour with an explicit scheduler and clock."""

    @classmethod
    def setUpClass(cls):
        cls.app = QApplication.instance()
        if cls.app is None:
            cls.app = QApplication([])

    def setUp(self):
        self.scheduler = ManualScheduler()
        self.clock = itertools.count(1000, 10)

    def make(self, value, capacity=None, **kwargs):
        cell = ReactiveCell(value)
        tracker = RefHistory(cell, capacity, scheduler=self.scheduler,
                             clock=lambda: next(self.clock), **kwargs)
        return cell, tracker

    def test_record_uses_previous_change_timestamp(self):
        cell, tracker = self.make(0)

        cell.value = 1
        cell.value = 2

        self.assertEqual([(r.value, r.timestamp) for r in tracker.history],
                         [(1, 1010), (0, 1000)])

    def test_timestamps_ordered_newest_first(self):
        cell, tracker = self.make(0)

        for i in range(1, 4):
            cell.value = i
        tracker.undo()
        self.scheduler.flush()
        tracker.redo()
        self.scheduler.flush()
        cell.value = 10

        stamps = [r.timestamp for r in tracker.history]
        self.assertEqual(stamps, sorted(stamps, reverse=True))

    def test_changes_before_tick_are_not_recorded(self):
        cell, tracker = self.make(0)

        cell.value = 1
        tracker.undo()
        cell.value = 9

        self.assertEqual(tracker.history, ())

        self.scheduler.flush()
        cell.value = 10

        self.assertEqual([r.value for r in tracker.history], [9])

    def test_later_suppression_survives_earlier_release(self):
        cell, tracker = self.make(0)

        cell.value = 1
        tracker.undo()
        tracker.redo()

        self.scheduler.flush(limit=1)
        self.assertIs(tracker.state, TrackerState.SUPPRESSING_REDO)

        self.scheduler.flush()
        self.assertIs(tracker.state, TrackerState.IDLE)

    def test_no_self_recording_over_many_steps(self):
        cell, tracker = self.make(0)
        for i in range(1, 6):
            cell.value = i

        for _ in range(3):
            tracker.undo()
            self.scheduler.flush()
        self.assertEqual(cell.value, 2)
        self.assertEqual(len(tracker.history) + len(tracker.future), 5)

        for _ in range(3):
            tracker.redo()
            self.scheduler.flush()
        self.assertEqual(cell.value, 5)
        self.assertEqual([r.value for r in tracker.history], [4, 3, 2, 1, 0])

    def test_undo_then_redo_round_trip(self):
        cell, tracker = self.make({'name': 'a'})
        cell.value = {'name': 'b'}
        cell.value = {'name': 'c'}

        tracker.undo()
        self.scheduler.flush()
        tracker.redo()
        self.scheduler.flush()

        self.assertEqual(cell.value, {'name': 'c'})

    def test_empty_undo_redo_are_noops(self):
        cell, tracker = self.make(0)
        changes = []
        tracker.history_changed.connect(lambda: changes.append(True))

        tracker.undo()
        tracker.redo()

        self.assertEqual(cell.value, 0)
        self.assertEqual(changes, [])
        self.assertEqual(self.scheduler.pending, 0)
        self.assertIs(tracker.state, TrackerState.IDLE)

    def test_zero_capacity_keeps_nothing(self):
        cap = ReactiveCell(1)
        cell, tracker = self.make(0, cap)
        cell.value = 1
        tracker.undo()
        self.scheduler.flush()
        self.assertTrue(tracker.can_redo())

        cap.value = 0
        cell.value = 2

        self.assertEqual(tracker.history, ())
        self.assertEqual(tracker.future, ())
        tracker.undo()
        self.assertEqual(cell.value, 2)

    def test_capacity_getter_dropping_to_zero(self):
        cap = {'n': 5}
        cell, tracker = self.make(0, lambda: cap['n'])
        for i in range(1, 6):
            cell.value = i
        self.assertEqual(len(tracker.history), 5)

        cap['n'] = 0
        cell.value = 99

        self.assertEqual(tracker.history, ())
        tracker.undo()
        self.assertEqual(cell.value, 99)

    def test_failing_scheduler_leaves_tracker_unchanged(self):
        def broken_scheduler(callback):
            raise RuntimeError("no event loop")

        cell = ReactiveCell(0)
        tracker = RefHistory(cell, scheduler=broken_scheduler)
        cell.value = 1

        with self.assertRaises(RuntimeError):
            tracker.undo()

        self.assertEqual(cell.value, 1)
        self.assertEqual([r.value for r in tracker.history], [0])
        self.assertEqual(tracker.future, ())
        self.assertIs(tracker.state, TrackerState.IDLE)

        cell.value = 2
        self.assertEqual([r.value for r in tracker.history], [1, 0])

    def test_failing_scheduler_on_redo(self):
        calls = []

        def scheduler(callback):
            if calls:
                raise RuntimeError("no event loop")
            calls.append(callback)

        cell = ReactiveCell(0)
        tracker = RefHistory(cell, scheduler=scheduler)
        cell.value = 1
        tracker.undo()
        calls[0]()

        with self.assertRaises(RuntimeError):
            tracker.redo()

        self.assertEqual(cell.value, 0)
        self.assertEqual([r.value for r in tracker.future], [1])
        self.assertEqual(tracker.history, ())
        self.assertIs(tracker.state, TrackerState.IDLE)

    def test_capacity_bound_holds_through_redo(self):
        cap = ReactiveCell(3)
        cell, tracker = self.make(0, cap)
        for i in range(1, 4):
            cell.value = i
        tracker.undo()
        self.scheduler.flush()

        cap.value = 2
        tracker.redo()
        self.scheduler.flush()

        self.assertEqual(len(tracker.history), 2)
        self.assertEqual(cell.value, 3)

    def test_invalid_constant_capacity_rejected(self):
        with self.assertRaises(ValueError):
            self.make(0, -1)
        with self.assertRaises(ValueError):
            self.make(0, 1.5)

    def test_set_capacity_switches_source(self):
        first = ReactiveCell(5)
        cell, tracker = self.make(0, first)
        for i in range(1, 6):
            cell.value = i

        second = ReactiveCell(2)
        tracker.set_capacity(second)
        self.assertEqual(len(tracker.history), 2)

        first.value = 1
        self.assertEqual(len(tracker.history), 2)

    def test_snapshots_are_isolated_from_live_value(self):
        cell, tracker = self.make([1])

        cell.value = [1, 2]
        cell.value.append(3)

        self.assertEqual(tracker.history[0].value, [1])

        tracker.undo()
        self.scheduler.flush()
        cell.value.append('x')

        self.assertEqual(tracker.future[0].value, [1, 2, 3])
        self.assertIsNot(cell.value, tracker.future[0].value)

    def test_in_place_mutation_with_trigger(self):
        cell, tracker = self.make([1])

        cell.value.append(2)
        cell.trigger()

        self.assertEqual(tracker.history[0].value, [1])
        tracker.undo()
        self.assertEqual(cell.value, [1])

    def test_clear_history(self):
        cell, tracker = self.make(0)
        cell.value = 1
        cell.value = 2
        tracker.undo()

        tracker.clear_history()

        self.assertFalse(tracker.can_undo())
        self.assertFalse(tracker.can_redo())

    def test_dispose_stops_recording(self):
        cap = ReactiveCell(5)
        cell, tracker = self.make(0, cap)
        cell.value = 1

        tracker.dispose()
        tracker.dispose()
        cell.value = 2
        cap.value = 0

        self.assertEqual([r.value for r in tracker.history], [0])

    def test_uncopyable_value_drops_recording(self):
        cell, tracker = self.make(0)
        failures = []
        tracker.snapshot_failed.connect(failures.append)

        cell.value = threading.Lock()
        self.assertEqual([r.value for r in tracker.history], [0])
        self.assertEqual(len(failures), 1)
        self.assertIsInstance(failures[0], SnapshotError)

        cell.value = 5
        self.assertEqual([r.value for r in tracker.history], [0])
        self.assertFalse(tracker.can_redo())

    def test_undo_with_uncopyable_current_value_raises(self):
        cell, tracker = self.make(0)
        cell.value = 1
        lock = threading.Lock()
        cell.value = lock

        with self.assertRaises(SnapshotError):
            tracker.undo()

        self.assertIs(cell.value, lock)
        self.assertEqual([r.value for r in tracker.history], [1, 0])
        self.assertIs(tracker.state, TrackerState.IDLE)


if __name__ == '__main__':
    unittest.main()
