from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from ..common.datetime_utils import month_clamp, month_range
from ..common.validators import require_amount, require_role
from ..core.constants import ADVANCE_EDITOR_ROLES, EDITOR_ROLES
from ..core.enums import AdvanceKind, Role
from ..core.exceptions import NoVariantSucceeded, ValidationError
from ..employees.model import EmployeeId
from ..endpoints import catalog
from ..endpoints.resolver import EndpointResolver
from ..normalize.shapes import to_record_array
from ..payroll.model import PayrollMonth
from .model import Advance, Deduction, OtherAllowance, advance_body, deduction_body, other_allowance_body

logger = logging.getLogger(__name__)


class _AdjustmentWriter:
    kind: str = ""

    def __init__(self, resolver: EndpointResolver, *, editor_roles: Iterable[str]):
        self._resolver = resolver
        self._editor_roles = frozenset(editor_roles)

    async def _write(
        self,
        method: str,
        employee_id: EmployeeId,
        *,
        current_role: Role,
        item_id=None,
        body=None,
        reason=None,
    ) -> Any:
        require_role(current_role, self._editor_roles)
        candidates = self._candidates(method, employee_id, item_id=item_id, body=body, reason=reason)
        result = await self._resolver.resolve(candidates)
        logger.info("%s %s for employee %s (id=%s)", method, self.kind, employee_id, item_id)
        return result

    def _candidates(self, method: str, employee_id: EmployeeId, *, item_id, body, reason):
        return catalog.adjustment_write(
            self.kind, method, employee_id=employee_id, item_id=item_id, body=body, reason=reason
        )


class DeductionService(_AdjustmentWriter):
    kind = "deductions"

    def __init__(self, resolver: EndpointResolver, *, editor_roles: Iterable[str] = EDITOR_ROLES):
        super().__init__(resolver, editor_roles=editor_roles)

    async def list_deductions(self, employee_id: EmployeeId, month: Optional[str] = None) -> list[Deduction]:
        """Deductions of a month; an empty list when no endpoint shape exists."""
        try:
            raw = await self._resolver.resolve(
                catalog.deductions_list(employee_id=employee_id, month=month_clamp(month))
            )
        except NoVariantSucceeded:
            logger.warning("no deductions endpoint answered for employee %s", employee_id)
            return []
        return [Deduction.from_json(r) for r in to_record_array(raw) if isinstance(r, Mapping)]

    async def create(self, employee_id: EmployeeId, data: Mapping[str, Any], *, current_role: Role) -> Any:
        if not data.get("date") and not data.get("month"):
            raise ValidationError("date or month is required")
        body = deduction_body(data)
        body["amount_iqd"] = require_amount(body.get("amount_iqd"), "amount_iqd")
        return await self._write("POST", employee_id, current_role=current_role, body=body)

    async def update(self, employee_id: EmployeeId, deduction_id, data: Mapping[str, Any], *, current_role: Role) -> Any:
        body = deduction_body(data)
        if "amount_iqd" in body:
            body["amount_iqd"] = require_amount(body["amount_iqd"], "amount_iqd")
        return await self._write("PUT", employee_id, current_role=current_role, item_id=deduction_id, body=body)

    async def delete(
        self, employee_id: EmployeeId, deduction_id, *, current_role: Role, reason: Optional[str] = None
    ) -> Any:
        return await self._write(
            "DELETE",
            employee_id,
            current_role=current_role,
            item_id=deduction_id,
            reason=(reason or "").strip() or None,
        )


def deductions_from_payroll(month: PayrollMonth) -> list[Deduction]:
    """Per-day deductions recovered from payroll rows when no records exist."""
    return [
        Deduction(id=f"{r.day}-{i}", amount=r.deductions, date=r.day)
        for i, r in enumerate(row for row in month.rows if row.deductions > 0)
    ]


def needs_payroll_fallback(deductions: list[Deduction]) -> bool:
    return not deductions or all(not d.amount for d in deductions)


class AdvanceService(_AdjustmentWriter):
    kind = "advances"

    def __init__(self, resolver: EndpointResolver, *, editor_roles: Iterable[str] = ADVANCE_EDITOR_ROLES):
        super().__init__(resolver, editor_roles=editor_roles)

    async def list_advances(self, employee_id: EmployeeId, month: Optional[str] = None) -> list[Advance]:
        raw = await self._resolver.resolve(catalog.advances_list(employee_id=employee_id, month=month))
        return [Advance.from_json(r) for r in to_record_array(raw) if isinstance(r, Mapping)]

    async def create(self, employee_id: EmployeeId, data: Mapping[str, Any], *, current_role: Role) -> Any:
        if not data.get("date"):
            raise ValidationError("date is required")
        body = advance_body({**data, "kind": _kind(data.get("kind"))})
        body["amount"] = body["amount_iqd"] = require_amount(body.get("amount_iqd"), "amount")
        return await self._write("POST", employee_id, current_role=current_role, body=body)

    async def update(self, employee_id: EmployeeId, advance_id, data: Mapping[str, Any], *, current_role: Role) -> Any:
        body = advance_body(data)
        if "kind" in body:
            body["kind"] = _kind(body["kind"])
        if "amount_iqd" in body:
            body["amount"] = body["amount_iqd"] = require_amount(body["amount_iqd"], "amount")
        return await self._write("PUT", employee_id, current_role=current_role, item_id=advance_id, body=body)

    async def delete(
        self, employee_id: EmployeeId, advance_id, *, current_role: Role, reason: Optional[str] = None
    ) -> Any:
        return await self._write(
            "DELETE",
            employee_id,
            current_role=current_role,
            item_id=advance_id,
            reason=(reason or "").strip() or None,
        )


def _kind(value) -> str:
    kind = str(getattr(value, "value", value) or "").lower()
    if kind not in {k.value for k in AdvanceKind}:
        raise ValidationError("kind must be 'advance' or 'repayment'")
    return kind


class OtherAllowanceService(_AdjustmentWriter):
    """Other allowances, keyed by payroll uid over a date range."""

    kind = "other allowance"

    def __init__(self, resolver: EndpointResolver, *, editor_roles: Iterable[str] = EDITOR_ROLES):
        super().__init__(resolver, editor_roles=editor_roles)

    async def list_other_allowances(self, employee_uid: str, month: Optional[str] = None) -> list[OtherAllowance]:
        date_from, date_to = month_range(month_clamp(month))
        raw = await self._resolver.resolve(
            catalog.other_allowances_list(employee_uid=employee_uid, date_from=date_from, date_to=date_to)
        )
        return [OtherAllowance.from_json(r) for r in to_record_array(raw) if isinstance(r, Mapping)]

    async def create(self, employee_uid: str, data: Mapping[str, Any], *, current_role: Role) -> Any:
        body = other_allowance_body(data)
        month = body.pop("month", None)
        if month and not (body.get("from") and body.get("to")):
            body["from"], body["to"] = month_range(month_clamp(month))
        if not body.get("from") or not body.get("to"):
            raise ValidationError("from and to (or month) are required")
        body["uid"] = employee_uid
        body["amount_iqd"] = require_amount(body.get("amount_iqd"), "amount_iqd")
        return await self._write("POST", employee_uid, current_role=current_role, body=body)

    async def update(self, employee_uid: str, item_id, data: Mapping[str, Any], *, current_role: Role) -> Any:
        body = other_allowance_body(data)
        body.pop("uid", None)
        if "amount_iqd" in body:
            body["amount_iqd"] = require_amount(body["amount_iqd"], "amount_iqd")
        return await self._write("PUT", employee_uid, current_role=current_role, item_id=item_id, body=body)

    async def delete(self, employee_uid: str, item_id, *, current_role: Role) -> Any:
        return await self._write("DELETE", employee_uid, current_role=current_role, item_id=item_id)

    def _candidates(self, method: str, employee_id: EmployeeId, *, item_id, body, reason):
        return catalog.other_allowance_write(method, item_id=item_id, body=body)
