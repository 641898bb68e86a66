from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from ..common.coerce import as_mapping, record_id
from ..common.datetime_utils import month_clamp, month_range
from ..common.validators import require_non_empty, require_role
from ..core.constants import EDITOR_ROLES
from ..core.enums import OverrideAction, Role
from ..core.exceptions import ValidationError
from ..employees.model import EmployeeId, EmployeeRef
from ..employees.service import EmployeeService
from ..endpoints import catalog
from ..endpoints.resolver import EndpointResolver
from ..normalize.shapes import to_record_array
from .model import LateEvent
from .reconciler import OverridePlan, desired_amount, plan_delete, plan_save

logger = logging.getLogger(__name__)


def created_id(payload: Any) -> Any:
    """Id of a freshly created override, from ``{id}`` or ``{data: {id}}``."""
    data = as_mapping(payload)
    value = data.get("id")
    if value is None:
        value = as_mapping(data.get("data")).get("id")
    return record_id(value)


class LateOverrideService:
    def __init__(
        self,
        resolver: EndpointResolver,
        *,
        employees: Optional[EmployeeService] = None,
        editor_roles: Iterable[str] = EDITOR_ROLES,
    ):
        self._resolver = resolver
        self._employees = employees
        self._editor_roles = frozenset(editor_roles)

    async def list_events(self, employee_id: EmployeeId, month: Optional[str] = None) -> list[LateEvent]:
        date_from, date_to = month_range(month_clamp(month))
        raw = await self._resolver.resolve(
            catalog.late_events(employee_id=employee_id, date_from=date_from, date_to=date_to)
        )
        return [LateEvent.from_json(r) for r in to_record_array(raw) if isinstance(r, Mapping)]

    async def find_event(self, employee_id: EmployeeId, date: str) -> LateEvent:
        day = str(date or "")[:10]
        for event in await self.list_events(employee_id, day[:7]):
            if event.date[:10] == day:
                return event
        raise ValidationError(f"no late event on {day}")

    async def save(
        self,
        event: LateEvent,
        desired_final: Any,
        reason: Optional[str],
        *,
        uid: str,
        current_role: Role,
    ) -> LateEvent:
        require_role(current_role, self._editor_roles)
        plan = plan_save(event, desired_final, reason, uid=uid)
        return await self._execute(plan, uid=uid)

    async def delete(self, event: LateEvent, reason: Optional[str], *, uid: str = "", current_role: Role) -> LateEvent:
        require_role(current_role, self._editor_roles)
        plan = plan_delete(event, reason)
        return await self._execute(plan, uid=uid)

    async def save_for_date(
        self,
        employee_id: EmployeeId,
        date: str,
        desired_final: Any,
        reason: Optional[str],
        *,
        current_role: Role,
        uid: Optional[str] = None,
    ) -> LateEvent:
        """Like ``save`` for the event on ``date``; role, reason and amount are checked before any lookup."""
        require_role(current_role, self._editor_roles)
        require_non_empty(reason or "", "reason")
        desired_amount(desired_final)
        event = await self.find_event(employee_id, date)
        uid = uid or await self._uid_for(employee_id)
        return await self.save(event, desired_final, reason, uid=uid, current_role=current_role)

    async def delete_for_date(
        self, employee_id: EmployeeId, date: str, reason: Optional[str], *, uid: str = "", current_role: Role
    ) -> LateEvent:
        require_role(current_role, self._editor_roles)
        require_non_empty(reason or "", "reason")
        event = await self.find_event(employee_id, date)
        return await self.delete(event, reason, uid=uid, current_role=current_role)

    async def _execute(self, plan: OverridePlan, *, uid: str) -> LateEvent:
        if plan.action == OverrideAction.NOOP:
            return plan.result()

        if plan.action == OverrideAction.CREATE:
            response = await self._resolver.resolve(catalog.late_override_create(plan.payload))
            result = plan.result(created_id(response))
        elif plan.action == OverrideAction.UPDATE:
            await self._resolver.resolve(catalog.late_override_update(plan.override_id, plan.payload))
            result = plan.result()
        else:
            await self._resolver.resolve(catalog.late_override_delete(plan.override_id, reason=plan.reason))
            result = plan.result()

        logger.info(
            "late override %s for %s on %s (final=%s)",
            plan.action.value,
            uid or "-",
            plan.event.date,
            result.final_penalty_iqd,
        )
        return result

    async def _uid_for(self, employee_id: EmployeeId) -> str:
        if self._employees is None:
            return EmployeeRef(id=employee_id).payroll_uid
        return (await self._employees.ref_for(employee_id)).payroll_uid
