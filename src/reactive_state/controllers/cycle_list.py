"""
Cycle List - cycles an active index over a list.

The list may be a plain Python list or a ReactiveCell holding one. When the
cell's list changes so that the active index is out of range, the index
resets to 0.
"""

from typing import Any, List, Optional, Union
from PySide6.QtCore import QObject, Signal

from ..models.domain.reactive_cell import ReactiveCell


class CycleList(QObject):
    """Controller for stepping forwards/backwards through a list with wrap-around."""

    index_changed = Signal(int)

    def __init__(self, items: Union[List[Any], ReactiveCell], parent: Optional[QObject] = None):
        super().__init__(parent)

        # A plain list is wrapped without copying so outside mutation stays visible
        self._items = items if isinstance(items, ReactiveCell) else ReactiveCell(items, self)
        self._active_index = 0

        self._items.value_changed.connect(self._on_items_changed)

    @property
    def items(self) -> ReactiveCell:
        return self._items

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def state(self) -> Any:
        """Item at the active index."""
        return self._items.value[self._active_index]

    @state.setter
    def state(self, value: Any) -> None:
        """Replace the item at the active index in place."""
        self._items.value[self._active_index] = value
        self._items.trigger()

    def next(self) -> None:
        """Advance, wrapping to the first item after the last one."""
        if self._active_index >= len(self._items.value) - 1:
            self._set_index(0)
            return
        self._set_index(self._active_index + 1)

    def prev(self) -> None:
        """Step back, wrapping to the last item before the first one."""
        if self._active_index <= 0:
            self._set_index(max(len(self._items.value) - 1, 0))
            return
        self._set_index(self._active_index - 1)

    def _on_items_changed(self, new_items: Any, old_items: Any) -> None:
        if self._active_index >= len(new_items):
            self._set_index(0)

    def _set_index(self, index: int) -> None:
        if index != self._active_index:
            self._active_index = index
            self.index_changed.emit(index)
