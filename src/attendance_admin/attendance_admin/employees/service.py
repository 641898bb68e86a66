from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..core.exceptions import NoVariantSucceeded
from ..endpoints import catalog
from ..endpoints.resolver import EndpointResolver
from ..normalize.shapes import first_record, to_record_array
from .model import EmployeeId, EmployeeRef, SalaryChange

logger = logging.getLogger(__name__)


class EmployeeService:
    def __init__(self, resolver: EndpointResolver):
        self._resolver = resolver

    async def get_employee(self, employee_id: EmployeeId) -> EmployeeRef:
        record = first_record(await self._resolver.resolve(catalog.employee_record(employee_id=employee_id)))
        if not isinstance(record, Mapping):
            return EmployeeRef(id=employee_id)
        ref = EmployeeRef.from_json(record)
        if ref.id is None:
            return EmployeeRef(id=employee_id, uid=ref.uid, code=ref.code, branch=ref.branch)
        return ref

    async def ref_for(self, employee_id: EmployeeId, *, uid: Optional[str] = None) -> EmployeeRef:
        """Reference for payroll lookups; a bare id when the record is unreachable."""
        if uid:
            return EmployeeRef(id=employee_id, uid=uid)
        try:
            return await self.get_employee(employee_id)
        except NoVariantSucceeded:
            logger.debug("employee %s has no record endpoint, using id only", employee_id)
            return EmployeeRef(id=employee_id)

    async def salary_history(self, employee_id: EmployeeId) -> list[SalaryChange]:
        raw = await self._resolver.resolve(catalog.salary_history(employee_id=employee_id))
        return [SalaryChange.from_json(h) for h in to_record_array(raw) if isinstance(h, Mapping)]
