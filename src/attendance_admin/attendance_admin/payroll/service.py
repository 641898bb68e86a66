from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

from ..adjustments.model import Deduction, advances_by_day
from ..adjustments.service import AdvanceService, DeductionService, deductions_from_payroll, needs_payroll_fallback
from ..attendance.model import AttendanceLogEntry
from ..attendance.service import LogService
from ..common.coerce import as_mapping
from ..common.datetime_utils import month_clamp, month_range
from ..core.exceptions import ApiError, NoVariantSucceeded
from ..employees.model import EmployeeRef
from ..endpoints import catalog
from ..endpoints.resolver import EndpointResolver
from ..normalize.shapes import first_record, to_record_array
from ..overrides.model import late_penalties_by_day
from ..overrides.service import LateOverrideService
from .aggregator import (
    aggregate,
    employee_meta,
    has_nonzero_days,
    month_totals,
    needs_log_rows,
    rows_from_logs,
)
from .calculator.food_allowance import food_calculator_for
from .model import BranchPayrollRow, PayrollMonth
from .month_matcher import matches

logger = logging.getLogger(__name__)


class PayrollService:
    """Builds the per-employee payroll month view.

    The payroll payload is the source of truth; late events, advances and raw
    logs are best-effort side data that only fill gaps it leaves.
    """

    def __init__(
        self,
        resolver: EndpointResolver,
        *,
        logs: LogService,
        deductions: DeductionService,
        advances: AdvanceService,
        late_overrides: LateOverrideService,
    ):
        self._resolver = resolver
        self._logs = logs
        self._deductions = deductions
        self._advances = advances
        self._late_overrides = late_overrides

    async def fetch_month(self, employee: EmployeeRef, month: str) -> Any:
        """Raw payload of the first endpoint whose answer belongs to ``month``."""
        date_from, date_to = month_range(month)
        return await self._resolver.resolve(
            catalog.payroll_month(employee_id=employee.id, employee_uid=employee.payroll_uid, month=month),
            accept=lambda data: matches(first_record(data), month, date_from, date_to),
        )

    async def get_month(self, employee: EmployeeRef, month: Optional[str] = None) -> PayrollMonth:
        month = month_clamp(month)
        raw = await self.fetch_month(employee, month)
        record = as_mapping(first_record(raw))
        if not has_nonzero_days(record) and month_totals(record)["hours_total"] > 0:
            record = await self._record_with_days(employee, month) or record

        late_map, advance_map, meta = await asyncio.gather(
            self._late_map(employee, month),
            self._advance_map(employee, month),
            self._employee_meta(employee, employee_meta(record)),
        )

        raw_logs: list = []
        if needs_log_rows(record):
            raw_logs = await self._month_logs(employee, month)

        calculator = food_calculator_for(
            meta.get("nationality"),
            meta.get("employment_type"),
            country=meta.get("country"),
            currency=meta.get("currency"),
            food_total=month_totals(record)["food_allowance"],
        )
        return aggregate(
            record,
            month,
            late_map=late_map,
            advance_map=advance_map,
            food_calculator=calculator,
            logs=[AttendanceLogEntry.from_json(r) for r in raw_logs],
            fallback_rows=rows_from_logs(raw_logs),
            meta=meta,
        )

    async def list_branch(
        self,
        month: Optional[str] = None,
        *,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        branch: Optional[str] = None,
    ) -> list[BranchPayrollRow]:
        """Every employee's payroll over a range (the month when no range is given)."""
        if not (date_from and date_to):
            date_from, date_to = month_range(month_clamp(month))
        raw = await self._resolver.resolve(
            catalog.branch_payroll(date_from=date_from, date_to=date_to, branch=branch)
        )
        return [BranchPayrollRow.from_json(r) for r in to_record_array(raw) if isinstance(r, Mapping)]

    async def deductions_with_fallback(self, employee: EmployeeRef, month: Optional[str] = None) -> list[Deduction]:
        """Deduction records, or per-day deductions read off payroll rows."""
        month = month_clamp(month)
        deductions = await self._deductions.list_deductions(employee.id, month)
        if not needs_payroll_fallback(deductions):
            return deductions
        try:
            payroll = await self.get_month(employee, month)
        except NoVariantSucceeded:
            return deductions
        return deductions_from_payroll(payroll) or deductions

    async def _late_map(self, employee: EmployeeRef, month: str) -> Mapping[str, float]:
        try:
            events = await self._late_overrides.list_events(employee.id, month)
        except ApiError as e:
            logger.warning("late events unavailable for employee %s: %s", employee.id, e.message)
            return {}
        return late_penalties_by_day(events)

    async def _advance_map(self, employee: EmployeeRef, month: str) -> Mapping[str, float]:
        try:
            advances = await self._advances.list_advances(employee.id, month)
        except ApiError as e:
            logger.warning("advances unavailable for employee %s: %s", employee.id, e.message)
            return {}
        return advances_by_day(advances)

    async def _record_with_days(self, employee: EmployeeRef, month: str) -> Optional[Mapping[str, Any]]:
        """The uid+range payroll record, when it carries per-day hours the first answer lacked."""
        uid = employee.payroll_uid
        try:
            data = await self._resolver.resolve(
                catalog.payroll_by_uid_range(employee_uid=uid, month=month),
                accept=lambda data: has_nonzero_days(as_mapping(_pick_record(data, uid))),
            )
        except ApiError as e:
            logger.warning("no per-day payroll for employee %s: %s", employee.id, e.message)
            return None
        return as_mapping(_pick_record(data, uid))

    async def _employee_meta(self, employee: EmployeeRef, meta: Mapping[str, str]) -> dict[str, str]:
        """Fill missing nationality/employment type from the employee record, then the overview."""
        merged = dict(meta)
        for candidates in (
            catalog.employee_record(employee_id=employee.id),
            catalog.employee_overview(employee_id=employee.id),
        ):
            if merged.get("nationality") and merged.get("employment_type"):
                break
            try:
                data = as_mapping(await self._resolver.resolve(candidates))
            except ApiError as e:
                logger.warning("employee details unavailable for employee %s: %s", employee.id, e.message)
                continue
            found = employee_meta({"employee": as_mapping(data.get("employee")) or data})
            merged = {**found, **merged}
        return merged

    async def _month_logs(self, employee: EmployeeRef, month: str) -> list:
        date_from, date_to = month_range(month)
        try:
            return await self._logs.fetch_raw_logs(employee.id, date_from, date_to)
        except ApiError as e:
            logger.warning("logs unavailable for employee %s: %s", employee.id, e.message)
            return []


def _pick_record(data: Any, uid: str) -> Any:
    """The record of ``uid`` in a list payload, else its first record."""
    if isinstance(data, list):
        for item in data:
            if isinstance(item, Mapping) and str(item.get("uid") or item.get("code") or "").upper() == uid:
                return item
    return first_record(data)
