"""
Cloning - deep copies used for history snapshots.

Snapshots never share structure with the live value. deep_clone() relies on
copy.deepcopy, so types can customize it with __deepcopy__ and cyclic
structures are supported. json_clone() is a stricter structural copy for
plain data (dicts, lists, strings, numbers, booleans, None).
"""

import copy
import json
from typing import Any, Callable

Cloner = Callable[[Any], Any]


class SnapshotError(RuntimeError):
    """Raised when a value cannot be copied into a history snapshot."""


def deep_clone(value: Any) -> Any:
    try:
        return copy.deepcopy(value)
    except (TypeError, copy.Error, RecursionError) as e:
        raise SnapshotError(f"Cannot snapshot value of type {type(value).__name__}: {e}") from e


def json_clone(value: Any) -> Any:
    # Tuples come back as lists, as in any JSON round trip
    try:
        return json.loads(json.dumps(value))
    except (TypeError, ValueError, RecursionError) as e:
        raise SnapshotError(f"Cannot snapshot value of type {type(value).__name__}: {e}") from e
