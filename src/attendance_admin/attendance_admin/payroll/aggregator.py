"""Merge heterogeneous payroll payloads into one ``PayrollMonth``.

Field names are resolved through the alias tables in ``normalize.aliases``;
every numeric field bottoms out at 0.
"""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import replace
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..attendance.model import AttendanceLogEntry
from ..common.coerce import as_hours, as_mapping, first_present, is_number, to_number
from ..common.datetime_utils import month_range
from ..core.constants import HOURS_DECIMALS
from ..normalize import aliases
from ..normalize.shapes import days_map_to_rows, first_record
from .calculator.base import FoodAllowanceCalculator, PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import DayRow, PayrollMonth

_ISO_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")

_MISSING = object()


def _first_scalar(containers: Iterable[Mapping], keys: Sequence[str]) -> Any:
    """First non-``None`` scalar under ``keys``, scanning containers in order.

    Lists and mappings are skipped: a top-level ``deductions`` list is a set
    of records, not a total.
    """
    for container in containers:
        for key in keys:
            value = container.get(key)
            if value is None or isinstance(value, (list, dict)):
                continue
            return value
    return _MISSING


def _total(totals: Mapping[str, Any], name: str) -> float:
    value = totals[name]
    return 0 if value is _MISSING else to_number(value)


def read_totals(record: Mapping) -> dict[str, Any]:
    """Month totals as found upstream; absent fields map to ``_MISSING``."""
    containers = [record] + [as_mapping(record.get(c)) for c in aliases.TOTALS_CONTAINERS]
    return {name: _first_scalar(containers, keys) for name, keys in aliases.PAYROLL_TOTALS.items()}


def month_totals(record: Mapping) -> dict[str, float]:
    """Like ``read_totals`` with absent fields read as 0."""
    totals = read_totals(record)
    return {name: _total(totals, name) for name in totals}


def normalize_day_row(raw: Any, index: int) -> DayRow:
    d = as_mapping(raw)
    label = first_present(d, aliases.DAY_LABEL)
    values = {name: to_number(first_present(d, keys)) for name, keys in aliases.DAY_ROW.items()}
    values["hours"] = as_hours(first_present(d, aliases.DAY_ROW["hours"]))
    return DayRow(day=str(label) if label is not None else f"{index + 1:02d}", **values)


def collect_rows(record: Mapping) -> list[DayRow]:
    """Rows from ``rows`` -> ``days`` -> ``details`` -> ``daily`` -> ``days_by_date``."""
    for key in aliases.ROW_LIST_SOURCES:
        source = record.get(key)
        if isinstance(source, Mapping):
            source = days_map_to_rows(source)
        if isinstance(source, list) and source:
            return [normalize_day_row(r, i) for i, r in enumerate(source)]
    return []


def has_nonzero_days(record: Mapping) -> bool:
    return any(r.hours > 0 for r in collect_rows(record))


def needs_log_rows(record: Mapping) -> bool:
    """No per-day rows, or rows without hours while the totals show some."""
    if not collect_rows(record):
        return True
    return not has_nonzero_days(record) and month_totals(record)["hours_total"] > 0


def aggregate_hours_from_logs(entries: Sequence[AttendanceLogEntry]) -> float:
    """Hours estimate from a log stream.

    The first entry decides the source: explicit ``hours`` when it has them,
    else ``duration_minutes / 60``; otherwise 0.
    """
    if not entries:
        return 0
    first = entries[0]
    if is_number(first.hours):
        total = sum(e.hours or 0 for e in entries)
    elif is_number(first.duration_minutes):
        total = sum((e.duration_minutes or 0) / 60 for e in entries)
    else:
        return 0
    return round(total, HOURS_DECIMALS)


def rows_from_logs(
    raw_logs: Sequence[Mapping[str, Any]],
    *,
    calculator: Optional[PayrollCalculator] = None,
) -> list[DayRow]:
    """Build day rows by summing worked hours of raw log entries per day."""
    calc = calculator or StandardPayrollCalculator()
    by_day: dict[str, float] = defaultdict(float)
    for ev in raw_logs:
        if not isinstance(ev, Mapping):
            continue
        day = first_present(ev, ("date", "day"))
        if day is None:
            stamp = first_present(ev, ("date_in", "ts_in"))
            day = str(stamp)[:10] if stamp is not None else None
        if not day:
            continue
        by_day[str(day)] += calc.worked_hours(ev)
    return [DayRow(day=day, hours=round(by_day[day], HOURS_DECIMALS)) for day in sorted(by_day)]


def _in_month(day: str, date_from: str, date_to: str) -> bool:
    if not _ISO_DAY_RE.match(day):
        return True
    return date_from <= day[:10] <= date_to


def aggregate(
    raw: Any,
    want_month: str,
    *,
    late_map: Optional[Mapping[str, float]] = None,
    advance_map: Optional[Mapping[str, float]] = None,
    food_calculator: Optional[FoodAllowanceCalculator] = None,
    logs: Sequence[AttendanceLogEntry] = (),
    fallback_rows: Sequence[DayRow] = (),
    meta: Optional[Mapping[str, Any]] = None,
) -> PayrollMonth:
    """Canonical payroll month out of whatever the server returned.

    ``late_map``/``advance_map`` (day -> IQD) fill per-day values the payload
    lacks. ``fallback_rows`` stand in when the payload carries no per-day data,
    or only rows without hours while its totals show some. ``meta`` replaces
    the employee fields read off the payload.

    Hours total: the explicit total, else the ``logs`` estimate, else the sum
    of the rows. Rows win over the log stream whenever the caller passes no
    logs, which ``PayrollService`` only fetches when rows are missing.
    """
    record = as_mapping(first_record(raw))
    date_from, date_to = month_range(want_month)
    late_map = late_map or {}
    advance_map = advance_map or {}
    meta = employee_meta(record) if meta is None else meta

    rows = [] if needs_log_rows(record) else collect_rows(record)
    rows = rows or list(fallback_rows)
    rows = sorted((r for r in rows if _in_month(r.day, date_from, date_to)), key=lambda r: r.day)

    merged = []
    for r in rows:
        key = r.day[:10]
        changes = {}
        if not r.late_penalty and key in late_map:
            changes["late_penalty"] = to_number(late_map[key])
        if not r.advance and key in advance_map:
            changes["advance"] = to_number(advance_map[key])
        merged.append(replace(r, **changes) if changes else r)
    rows = merged

    totals = read_totals(record)
    food_total = _total(totals, "food_allowance")
    other_total = _total(totals, "other_allowance")

    if food_calculator and rows and all(not r.food_allowance for r in rows):
        rows = [replace(r, food_allowance=food_calculator.allowance_for(r.hours)) for r in rows]

    if other_total > 0 and rows and all(not r.other_allowance for r in rows):
        worked = sum(1 for r in rows if r.hours > 0) or len(rows)
        per_day = other_total // max(1, worked)
        rows = [replace(r, other_allowance=per_day if r.hours > 0 else 0) for r in rows]

    if totals["hours_total"] is not _MISSING:
        hours_total = to_number(totals["hours_total"])
    elif logs:
        hours_total = aggregate_hours_from_logs(logs)
    else:
        hours_total = round(sum(r.hours for r in rows), HOURS_DECIMALS)

    # per-day advance records beat the payload total
    advances = sum(to_number(v) for v in advance_map.values())
    if not advances:
        advances = _total(totals, "advances")
    if not advances:
        advances = sum(r.advance for r in rows)

    return PayrollMonth(
        month=want_month,
        hours_total=hours_total,
        food_allowance=food_total,
        other_allowance=other_total,
        deductions=_total(totals, "deductions"),
        late_penalty=_total(totals, "late_penalty"),
        advances=advances,
        total_pay=_total(totals, "total_pay"),
        rows=tuple(rows),
        nationality=meta.get("nationality"),
        employment_type=meta.get("employment_type"),
    )


def employee_meta(record: Mapping) -> dict[str, str]:
    """Food-policy fields the payload carries, lowercased; absent ones left out."""
    meta = {}
    for name in aliases.META_FIELDS:
        value = meta_field(record, name)
        if value:
            meta[name] = value
    return meta


def meta_field(record: Mapping, name: str) -> Optional[str]:
    for key in aliases.EMPLOYEE_META:
        value = as_mapping(record.get(key)).get(name)
        if value:
            return str(value).lower()
    value = record.get(name)
    return str(value).lower() if value else None
