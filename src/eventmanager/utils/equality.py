from __future__ import annotations

from datetime import date, datetime, time
from collections.abc import Mapping
from typing import Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def deep_equal(a: Any, b: Any) -> bool:
    """Return True if ``a`` and ``b`` are structurally equal.

    Handles primitives, lists/tuples, dates and plain mappings. Bools are
    never equal to numbers, and a ``date`` is never equal to a ``datetime``.
    Cyclic structures are not supported.
    """
    if a is b:
        return True
    if a is None or b is None:
        return False

    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if _is_number(a) or _is_number(b):
        return _is_number(a) and _is_number(b) and a == b

    if isinstance(a, (str, bytes)) or isinstance(b, (str, bytes)):
        return type(a) is type(b) and a == b

    if isinstance(a, (date, time)) or isinstance(b, (date, time)):
        # datetime subclasses date; keep them apart
        if isinstance(a, datetime) != isinstance(b, datetime):
            return False
        return a == b

    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        return all(deep_equal(x, y) for x, y in zip(a, b))

    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if len(a) != len(b):
            return False
        for k, v in a.items():
            if k not in b:
                return False
            if not deep_equal(v, b[k]):
                return False
        return True

    if isinstance(a, (list, tuple, Mapping)) or isinstance(b, (list, tuple, Mapping)):
        return False

    return a == b


__all__ = ["deep_equal"]
