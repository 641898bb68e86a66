from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Optional

from ..common.coerce import as_hours, as_mapping, to_number, upper_or_none
from ..normalize import aliases


@dataclass(frozen=True)
class DayRow:
    """One calendar day of a payroll month; every amount is in IQD."""

    day: str
    hours: float = 0
    food_allowance: float = 0
    other_allowance: float = 0
    deductions: float = 0
    late_penalty: float = 0
    advance: float = 0


@dataclass(frozen=True)
class PayrollMonth:
    """Canonical per-employee-per-month aggregate.

    Numeric fields are never missing: absent upstream values are 0.
    """

    month: str
    hours_total: float = 0
    food_allowance: float = 0
    other_allowance: float = 0
    deductions: float = 0
    late_penalty: float = 0
    advances: float = 0
    total_pay: float = 0
    rows: tuple[DayRow, ...] = field(default_factory=tuple)
    nationality: Optional[str] = None
    employment_type: Optional[str] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["rows"] = [asdict(r) for r in self.rows]
        return data


@dataclass(frozen=True)
class BranchPayrollRow:
    """One employee's line in the branch-wide payroll listing."""

    uid: str
    code: str = ""
    name: str = ""
    branch: str = ""
    nationality: str = ""
    days: dict = field(default_factory=dict)
    totals: dict = field(default_factory=dict)
    meta: Optional[Mapping[str, Any]] = None

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> "BranchPayrollRow":
        meta = raw.get("meta")
        totals = as_mapping(raw.get("totals"))
        return cls(
            uid=upper_or_none(raw.get("uid") or as_mapping(meta).get("uid")) or "",
            code=str(raw.get("code") or ""),
            name=str(raw.get("name") or ""),
            branch=str(raw.get("branch") or ""),
            nationality=str(raw.get("nationality") or "").lower(),
            days={str(k): as_hours(v) for k, v in as_mapping(raw.get("days")).items()},
            totals={key: to_number(totals.get(key)) for key in aliases.BRANCH_TOTALS},
            meta=meta if isinstance(meta, Mapping) else None,
        )

    def to_dict(self) -> dict:
        return asdict(self)
