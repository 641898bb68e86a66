from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Optional

from ..common.coerce import is_number
from ..core.constants import HOURS_DECIMALS


@dataclass(frozen=True)
class AttendanceLogEntry:
    """One clock event or shift as the admin views it.

    ``hours`` is explicit when the server sends it, otherwise derived from
    ``duration_minutes``; ``None`` when neither is known.
    """

    timestamp: Optional[str]
    id: Any = None
    in_at: Optional[str] = None
    out_at: Optional[str] = None
    device: str = ""
    hours: Optional[float] = None
    late: bool = False
    duration_minutes: Optional[float] = None
    type: Optional[str] = None
    source: Optional[str] = None
    branch: Optional[str] = None

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> "AttendanceLogEntry":
        hours = raw.get("hours")
        minutes = raw.get("duration_minutes")
        if not is_number(hours):
            hours = round(minutes / 60, HOURS_DECIMALS) if is_number(minutes) else None
        in_at = raw.get("in")
        device = raw.get("device")
        return cls(
            id=raw.get("id"),
            timestamp=raw.get("timestamp"),
            in_at=in_at if in_at is not None else raw.get("timestamp"),
            out_at=raw.get("out"),
            device=device if device is not None else (raw.get("source") or ""),
            hours=hours,
            late=bool(raw.get("late")),
            duration_minutes=minutes if is_number(minutes) else None,
            type=raw.get("type"),
            source=raw.get("source"),
            branch=raw.get("branch"),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["in"] = data.pop("in_at")
        data["out"] = data.pop("out_at")
        return data


@dataclass(frozen=True)
class Session:
    """An IN/OUT pair; either side may be missing."""

    in_at: Optional[str] = None
    out_at: Optional[str] = None
    device: Optional[str] = None

    def to_dict(self) -> dict:
        return {"in": self.in_at, "out": self.out_at, "device": self.device}


@dataclass(frozen=True)
class EmployeeOverview:
    employee: Mapping[str, Any]
    last_logs: tuple[AttendanceLogEntry, ...] = field(default_factory=tuple)
    month_hours: float = 0
    late_count: int = 0
    last_seen: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "employee": dict(self.employee),
            "attendance": {"last_logs": [e.to_dict() for e in self.last_logs]},
            "stats": {
                "month_hours": self.month_hours,
                "late_count": self.late_count,
                "last_seen": self.last_seen,
            },
        }
