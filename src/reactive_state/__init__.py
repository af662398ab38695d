"""reactive_state - reactive state primitives for PySide6 applications.

Undo/redo history for a single reactive value, a cycling list selector and
a theme toggle, all built on Qt signals.
"""

from .models.domain import ReactiveCell, HistoryRecord, TrackerState
from .services.history import RefHistory, SnapshotError, validate_capacity
from .services.scheduling import next_tick, wait_tick, ManualScheduler
from .controllers import CycleList, ThemeController, SettingsController

__version__ = "1.0.0"

__all__ = [
    'ReactiveCell', 'HistoryRecord', 'TrackerState',
    'RefHistory', 'SnapshotError', 'validate_capacity',
    'next_tick', 'wait_tick', 'ManualScheduler',
    'CycleList', 'ThemeController', 'SettingsController',
]
