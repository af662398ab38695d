"""Domain models - the reactive cell and history records."""

from .reactive_cell import ReactiveCell
from .history_record import HistoryRecord, TrackerState

__all__ = ['ReactiveCell', 'HistoryRecord', 'TrackerState']
