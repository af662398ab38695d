"""
Reactive Cell - observable holder for a single value.

Emits value_changed(new, old) synchronously whenever a different value
is written, following the same property/signal pattern as the other
observable models.
"""

from typing import Any, Optional
from PySide6.QtCore import QObject, Signal


class ReactiveCell(QObject):
    """Observable single-value container."""

    # (new_value, old_value)
    value_changed = Signal(object, object)

    def __init__(self, value: Any = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._value = value

    @property
    def value(self) -> Any:
        """Get current value."""
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        """Set value and notify subscribers if it changed."""
        if not _has_changed(self._value, value):
            return
        old_value = self._value
        self._value = value
        self.value_changed.emit(value, old_value)

    def get(self) -> Any:
        return self._value

    def set(self, value: Any) -> None:
        self.value = value

    def trigger(self) -> None:
        """Re-announce the current value after an in-place mutation."""
        self.value_changed.emit(self._value, self._value)

    def __repr__(self) -> str:
        return f"ReactiveCell({self._value!r})"


def _has_changed(old: Any, new: Any) -> bool:
    if old is new:
        return False
    try:
        return bool(old != new)
    except (TypeError, ValueError):
        # Values without a usable equality count as changed
        return True
