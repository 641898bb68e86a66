from __future__ import annotations

from typing import Any, Mapping

from ..common.coerce import first_truthy
from ..normalize.aliases import FROM_FIELDS, MONTH_FIELDS, TO_FIELDS


def matches(obj: Any, want_month: str, date_from: str, date_to: str) -> bool:
    """Whether a fetched payroll object belongs to ``want_month``.

    Explicit month fields win, then an explicit from/to pair, then the dates
    of ``rows``, then the keys of a ``days`` map. An object whose shape says
    nothing about its period is accepted: rejecting unknown-but-valid data is
    worse than showing a possibly-wrong month in a best-effort view.
    """
    if not isinstance(obj, Mapping):
        return True

    month_field = str(first_truthy(obj, MONTH_FIELDS, ""))[:7]
    if month_field:
        return month_field == want_month

    from_field = str(first_truthy(obj, FROM_FIELDS, ""))[:10]
    to_field = str(first_truthy(obj, TO_FIELDS, ""))[:10]
    if from_field and to_field:
        return from_field == date_from and to_field == date_to

    rows = obj.get("rows")
    if isinstance(rows, list):
        days = [_row_day(r) for r in rows]
        return any(d.startswith(want_month) for d in days if d)

    days_map = obj.get("days")
    if isinstance(days_map, Mapping):
        return any(str(k).startswith(want_month) for k in days_map)

    return True


def _row_day(row: Any) -> str:
    if not isinstance(row, Mapping):
        return ""
    return str(first_truthy(row, ("date", "day"), ""))[:10]
