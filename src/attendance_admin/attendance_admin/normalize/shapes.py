"""Turn arbitrary JSON payloads into canonical shapes.

Nothing here raises on an unexpected shape: an unrecognized payload
degrades to an empty result so a display surface never crashes on it.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..common.coerce import as_hours

WRAPPER_KEYS = ("items", "data", "results")


def to_record_array(payload: Any) -> list:
    """Canonical list of records.

    Resolution order, first match wins: the payload itself when it is a list,
    then an ``items``, ``data`` or ``results`` list, then the first
    list-valued property in insertion order, else ``[]``.
    """
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, Mapping):
        return []
    for key in WRAPPER_KEYS:
        value = payload.get(key)
        if isinstance(value, list):
            return value
    for value in payload.values():
        if isinstance(value, list):
            return value
    return []


def first_record(payload: Any) -> Any:
    """A single record out of a payload that may be wrapped in a list."""
    if isinstance(payload, list):
        return payload[0] if payload else None
    return payload


def days_map_to_rows(days: Any) -> list[dict]:
    """``{"2024-03-02": 8, "2024-03-01": "7:30"}`` -> rows sorted by day.

    Values may be numbers, ``H:MM`` strings or ``{"hours": ...}`` objects.

    ISO dates sort correctly as strings, so keys are sorted lexicographically.
    """
    if not isinstance(days, Mapping):
        return []
    return [{"day": str(key), "hours": as_hours(days[key])} for key in sorted(days, key=str)]
