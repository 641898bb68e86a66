from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..common.coerce import as_mapping, upper_or_none
from ..core.constants import EMPLOYEE_UID_PREFIX

EmployeeId = Union[int, str]


@dataclass(frozen=True)
class EmployeeRef:
    """Identifies an employee for the duration of a request."""

    id: EmployeeId
    uid: Optional[str] = None
    code: Optional[str] = None
    branch: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "uid", upper_or_none(self.uid))
        object.__setattr__(self, "code", upper_or_none(self.code))

    @property
    def payroll_uid(self) -> str:
        """UID used by direct ``/payroll`` queries."""
        if self.uid:
            return self.uid
        if self.code:
            return self.code
        return f"{EMPLOYEE_UID_PREFIX}{str(self.id).zfill(3)}"

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "EmployeeRef":
        return cls(
            id=data.get("id"),
            uid=data.get("uid") or as_mapping(data.get("meta")).get("uid"),
            code=data.get("code"),
            branch=data.get("branch"),
        )


@dataclass(frozen=True)
class SalaryChange:
    effective_from: Optional[str]
    employment_type: Optional[str]
    hourly_rate: Optional[float]
    salary_iqd: Optional[float]
    edited_by: Optional[str] = None
    edited_at: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def from_json(cls, h: Mapping[str, Any]) -> "SalaryChange":
        return cls(
            effective_from=h.get("effective_from") if h.get("effective_from") is not None else h.get("month"),
            employment_type=h.get("employment_type"),
            hourly_rate=h.get("hourly_rate"),
            salary_iqd=h.get("salary_iqd") if h.get("salary_iqd") is not None else h.get("gross"),
            edited_by=h.get("edited_by"),
            edited_at=h.get("edited_at"),
            reason=h.get("reason"),
        )
