"""
Capacity - validation and resolution of history capacity sources.

A capacity source is a constant, a ReactiveCell holding a constant, or a
zero-argument callable returning one. None and math.inf mean unbounded.
"""

import math
import numbers
from typing import Any, Callable, Union

from ...models.domain.reactive_cell import ReactiveCell

UNBOUNDED = math.inf

Capacity = Union[int, float, None]
CapacitySource = Union[Capacity, ReactiveCell, Callable[[], Capacity]]


def validate_capacity(value: Any) -> Union[int, float]:
    """Check a configured capacity and normalize it.

    Returns a non-negative int, or UNBOUNDED for None/inf.
    Raises ValueError for anything else.
    """
    if value is None:
        return UNBOUNDED
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"History capacity must be a number, got {value!r}")
    if value == UNBOUNDED:
        return UNBOUNDED
    if isinstance(value, float) and math.isnan(value):
        raise ValueError("History capacity must not be NaN")
    if value < 0:
        raise ValueError(f"History capacity must not be negative, got {value!r}")
    if int(value) != value:
        raise ValueError(f"History capacity must be a whole number, got {value!r}")
    return int(value)


def resolve_capacity(source: CapacitySource) -> Union[int, float]:
    """Read the current capacity from a source.

    Dynamic sources are trusted to hold validated values.
    """
    if isinstance(source, ReactiveCell):
        value = source.value
    elif callable(source):
        value = source()
    else:
        value = source
    return UNBOUNDED if value is None else value


def is_dynamic(source: CapacitySource) -> bool:
    return isinstance(source, ReactiveCell) or callable(source)
