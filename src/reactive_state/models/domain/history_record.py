"""
History Record - snapshot and recording-state types used by RefHistory.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


@dataclass(frozen=True)
class HistoryRecord:
    """Snapshot of a tracked value at a point in time."""

    value: Any
    timestamp: int  # milliseconds since the epoch


class TrackerState(Enum):
    """Recording state of a RefHistory."""

    IDLE = auto()
    SUPPRESSING_UNDO = auto()
    SUPPRESSING_REDO = auto()
