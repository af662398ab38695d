"""History System - undo/redo snapshots of a reactive value."""

from .capacity import validate_capacity, resolve_capacity, UNBOUNDED
from .cloning import SnapshotError, deep_clone, json_clone
from .ref_history import RefHistory

__all__ = [
    'RefHistory',
    'SnapshotError', 'deep_clone', 'json_clone',
    'validate_capacity', 'resolve_capacity', 'UNBOUNDED',
]
