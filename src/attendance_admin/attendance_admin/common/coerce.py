"""Helpers for probing loosely-shaped JSON payloads."""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Optional

_HOURS_MINUTES_RE = re.compile(r"^(\d+):(\d{2})$")


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_number(value: Any, default: float = 0) -> float:
    """Numeric value of ``value``; ``default`` for missing/non-numeric input."""
    if value is None or isinstance(value, bool):
        return default
    if is_number(value):
        return value
    try:
        n = float(str(value).strip())
    except ValueError:
        return default
    if n != n:
        return default
    return int(n) if n.is_integer() else n


def as_hours(value: Any) -> float:
    """Hours out of ``8``, ``"7.5"``, ``"7:30"`` or ``{"hours": ...}``; 0 otherwise."""
    if is_number(value):
        return value
    if isinstance(value, str):
        m = _HOURS_MINUTES_RE.match(value.strip())
        if m:
            return int(m.group(1)) + int(m.group(2)) / 60
        return to_number(value)
    if isinstance(value, Mapping):
        for key in ("hours", "total_hours"):
            if value.get(key) is not None:
                return as_hours(value[key])
    return 0


def first_present(obj: Any, keys: Iterable[str], default: Any = None) -> Any:
    """Value of the first key that is present and not ``None``."""
    if not isinstance(obj, Mapping):
        return default
    for key in keys:
        value = obj.get(key)
        if value is not None:
            return value
    return default


def first_truthy(obj: Any, keys: Iterable[str], default: Any = None) -> Any:
    if not isinstance(obj, Mapping):
        return default
    for key in keys:
        value = obj.get(key)
        if value:
            return value
    return default


def as_mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def upper_or_none(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value).strip().upper()


def record_id(value: Any) -> Any:
    """Ids as the backend sent them; numeric strings become ints."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    if is_number(value):
        return int(value) if float(value).is_integer() else value
    text = str(value).strip()
    return int(text) if text.isdigit() else text
