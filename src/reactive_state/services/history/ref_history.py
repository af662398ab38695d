"""
Ref History - undo/redo tracking for a single reactive value.

RefHistory subscribes to a ReactiveCell and keeps two stacks of snapshots:
past (values the cell held before each change) and future (values undone
since the last change). Both are newest-first. The cell's current value is
never stored in either stack.

undo()/redo() write into the same cell they observe. While such a write is
being delivered the tracker is in a suppressing state and does not record
it; the return to IDLE is deferred to the next scheduler tick.
"""

import logging
import time
from typing import Any, Callable, List, Optional, Tuple

from PySide6.QtCore import QObject, Signal

from ...models.domain.history_record import HistoryRecord, TrackerState
from ...models.domain.reactive_cell import ReactiveCell
from ..scheduling.next_tick import next_tick
from .capacity import (
    UNBOUNDED, CapacitySource, is_dynamic, resolve_capacity, validate_capacity,
)
from .cloning import Cloner, SnapshotError, deep_clone

logger = logging.getLogger(__name__)

# Marks a last-seen value that could not be copied
_UNAVAILABLE = object()


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class RefHistory(QObject):
    """Bounded undo/redo history of a ReactiveCell.

    Args:
        source: cell to track.
        capacity: maximum number of past entries. A constant (int, None or
            math.inf for unbounded), a ReactiveCell holding one, or a
            zero-argument callable. Cells are watched and past is truncated
            as soon as they shrink; callables are re-read on every mutation
            and on reconcile().
        scheduler: callable taking a callback to run on the next tick.
            Defaults to the Qt event loop (next_tick).
        clone: deep-copy function for snapshots. Defaults to deep_clone.
        clock: returns the current time in milliseconds.
    """

    history_changed = Signal()
    snapshot_failed = Signal(object)  # SnapshotError

    def __init__(self, source: ReactiveCell, capacity: CapacitySource = UNBOUNDED, *,
                 scheduler: Optional[Callable[[Callable[[], None]], None]] = None,
                 clone: Optional[Cloner] = None,
                 clock: Optional[Callable[[], int]] = None,
                 parent: Optional[QObject] = None):
        super().__init__(parent)

        self._source = source
        self._scheduler = scheduler or next_tick
        self._clone = clone or deep_clone
        self._clock = clock or _wall_clock_ms

        self._past: List[HistoryRecord] = []
        self._future: List[HistoryRecord] = []

        self._state = TrackerState.IDLE
        self._suppress_token = 0
        self._disposed = False

        self._last_stamp = 0
        self._last_value = self._clone(source.value)
        self._last_changed = self._now()

        self._capacity_source: CapacitySource = UNBOUNDED
        self.set_capacity(capacity)
        self._source.value_changed.connect(self._on_source_changed)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def history(self) -> Tuple[HistoryRecord, ...]:
        """Past entries, most recent first."""
        return tuple(self._past)

    @property
    def future(self) -> Tuple[HistoryRecord, ...]:
        """Undone entries, most recently undone first."""
        return tuple(self._future)

    @property
    def source(self) -> ReactiveCell:
        return self._source

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def capacity(self):
        """Currently resolved capacity."""
        return resolve_capacity(self._capacity_source)

    def can_undo(self) -> bool:
        return len(self._past) > 0

    def can_redo(self) -> bool:
        return len(self._future) > 0

    # ------------------------------------------------------------------
    # Undo / redo
    # ------------------------------------------------------------------

    def undo(self) -> None:
        """Restore the most recent past value. No-op when past is empty.

        Raises SnapshotError if the current or restored value cannot be
        copied, and re-raises scheduler errors; in both cases neither the
        history nor the cell changes.
        """
        if not self._past:
            return

        current = self._clone(self._source.value)
        restored = self._clone(self._past[0].value)

        self._suppress(TrackerState.SUPPRESSING_UNDO)

        self._past.pop(0)
        self._future.insert(0, HistoryRecord(current, self._now()))
        self._source.value = restored
        logger.debug("Undo: %d past, %d future", len(self._past), len(self._future))
        self.history_changed.emit()

    def redo(self) -> None:
        """Re-apply the most recently undone value. No-op when future is empty."""
        if not self._future:
            return

        current = self._clone(self._source.value)
        restored = self._clone(self._future[0].value)

        self._suppress(TrackerState.SUPPRESSING_REDO)

        self._future.pop(0)
        self._past.insert(0, HistoryRecord(current, self._now()))
        self._truncate(self.capacity)
        self._source.value = restored
        logger.debug("Redo: %d past, %d future", len(self._past), len(self._future))
        self.history_changed.emit()

    def clear_history(self) -> None:
        """Drop all past and future entries."""
        self._past.clear()
        self._future.clear()
        self.history_changed.emit()

    # ------------------------------------------------------------------
    # Capacity
    # ------------------------------------------------------------------

    def set_capacity(self, capacity: CapacitySource) -> None:
        """Replace the capacity source and truncate past to it."""
        if not is_dynamic(capacity):
            capacity = validate_capacity(capacity)

        if isinstance(self._capacity_source, ReactiveCell):
            self._capacity_source.value_changed.disconnect(self._on_capacity_changed)
        self._capacity_source = capacity
        if isinstance(capacity, ReactiveCell):
            capacity.value_changed.connect(self._on_capacity_changed)

        self.reconcile()

    def reconcile(self) -> None:
        """Truncate past to the currently resolved capacity, oldest first."""
        if self._truncate(self.capacity):
            self.history_changed.emit()

    def dispose(self) -> None:
        """Stop observing the source cell and the capacity cell."""
        if self._disposed:
            return
        self._disposed = True
        self._source.value_changed.disconnect(self._on_source_changed)
        if isinstance(self._capacity_source, ReactiveCell):
            self._capacity_source.value_changed.disconnect(self._on_capacity_changed)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_source_changed(self, new_value: Any, old_value: Any) -> None:
        if self._state is not TrackerState.IDLE:
            self._remember(new_value)
            return

        previous, previous_stamp = self._last_value, self._last_changed
        self._remember(new_value)

        self._future.clear()

        capacity = self.capacity
        if capacity > 0 and previous is not _UNAVAILABLE:
            self._truncate(capacity - 1)
            self._past.insert(0, HistoryRecord(previous, previous_stamp))
        else:
            self._truncate(capacity)

        self.history_changed.emit()

    def _on_capacity_changed(self, new_value: Any, old_value: Any) -> None:
        self.reconcile()

    def _remember(self, value: Any) -> None:
        """Keep a private copy of the value the cell now holds."""
        self._last_changed = self._now()
        try:
            self._last_value = self._clone(value)
        except SnapshotError as e:
            # The change already happened; only its future snapshot is lost
            self._last_value = _UNAVAILABLE
            logger.warning("History snapshot dropped: %s", e)
            self.snapshot_failed.emit(e)

    def _truncate(self, capacity) -> bool:
        if len(self._past) <= capacity:
            return False
        dropped = len(self._past) - int(capacity)
        del self._past[int(capacity):]
        logger.debug("Dropped %d oldest history entries (capacity %s)", dropped, capacity)
        return True

    def _suppress(self, state: TrackerState) -> None:
        previous_state, previous_token = self._state, self._suppress_token
        self._state = state
        self._suppress_token += 1
        token = self._suppress_token
        try:
            self._scheduler(lambda: self._release(token))
        except Exception:
            # Nothing was written yet; leave the tracker as it was
            self._state, self._suppress_token = previous_state, previous_token
            raise

    def _release(self, token: int) -> None:
        # A later undo/redo owns the suppression until its own tick
        if token == self._suppress_token:
            self._state = TrackerState.IDLE

    def _now(self) -> int:
        self._last_stamp = max(self._clock(), self._last_stamp)
        return self._last_stamp
