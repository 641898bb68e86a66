from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Mapping, Optional

from ..common.coerce import as_mapping
from ..common.datetime_utils import iso_day_end, iso_day_start
from ..core.exceptions import ApiError, NoVariantSucceeded
from ..employees.model import EmployeeId
from ..endpoints import catalog
from ..endpoints.resolver import EndpointResolver
from ..normalize.shapes import first_record, to_record_array
from ..payroll.aggregator import aggregate_hours_from_logs
from .model import AttendanceLogEntry, EmployeeOverview

logger = logging.getLogger(__name__)

_PLAIN_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _bound(value: Optional[str], *, end: bool) -> Optional[str]:
    """Plain days widen to the first/last second of that day."""
    if not value:
        return None
    if _PLAIN_DAY_RE.match(value):
        return iso_day_end(value) if end else iso_day_start(value)
    return value


class LogService:
    def __init__(self, resolver: EndpointResolver):
        self._resolver = resolver

    async def fetch_raw_logs(
        self,
        employee_id: EmployeeId,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> list:
        raw = await self._resolver.resolve(
            catalog.logs(
                employee_id=employee_id,
                date_from=_bound(date_from, end=False),
                date_to=_bound(date_to, end=True),
            )
        )
        return [r for r in to_record_array(raw) if isinstance(r, Mapping)]

    async def get_logs(
        self,
        employee_id: EmployeeId,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
    ) -> list[AttendanceLogEntry]:
        """Newest first, as the server sorts them."""
        return [AttendanceLogEntry.from_json(r) for r in await self.fetch_raw_logs(employee_id, date_from, date_to)]

    async def get_overview(self, employee_id: EmployeeId) -> EmployeeOverview:
        """Overview endpoint when it knows the employee, else built from logs."""
        try:
            data = as_mapping(await self._resolver.resolve(catalog.employee_overview(employee_id=employee_id)))
        except NoVariantSucceeded:
            data = {}
        if data.get("employee"):
            return _overview_from_json(data)

        logger.debug("overview endpoint unavailable for employee %s, using logs", employee_id)
        employee, logs = await asyncio.gather(
            self._employee_record(employee_id),
            self.get_logs(employee_id),
        )
        last = logs[0] if logs else None
        return EmployeeOverview(
            employee=employee or {"id": employee_id},
            last_logs=tuple(logs),
            month_hours=aggregate_hours_from_logs(logs),
            late_count=sum(1 for e in logs if e.late),
            last_seen=last.in_at if last else None,
        )

    async def _employee_record(self, employee_id: EmployeeId) -> Optional[Mapping[str, Any]]:
        try:
            record = first_record(await self._resolver.resolve(catalog.employee_record(employee_id=employee_id)))
        except ApiError as e:
            logger.warning("employee record %s unavailable: %s", employee_id, e.message)
            return None
        return record if isinstance(record, Mapping) else None


def _overview_from_json(data: Mapping[str, Any]) -> EmployeeOverview:
    attendance = as_mapping(data.get("attendance"))
    stats = as_mapping(data.get("stats"))
    logs = tuple(
        AttendanceLogEntry.from_json(r) for r in attendance.get("last_logs") or [] if isinstance(r, Mapping)
    )
    return EmployeeOverview(
        employee=as_mapping(data.get("employee")),
        last_logs=logs,
        month_hours=stats.get("month_hours") or 0,
        late_count=stats.get("late_count") or 0,
        last_seen=stats.get("last_seen"),
    )
