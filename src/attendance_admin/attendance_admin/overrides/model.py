from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.coerce import first_present, record_id, to_number
from ..core.enums import OverrideMode, OverrideState
from ..normalize import aliases


@dataclass(frozen=True)
class LateOverride:
    """Manual correction of one day's late penalty."""

    mode: OverrideMode
    amount_iqd: float
    note: Optional[str] = None
    id: Any = None

    def apply(self, auto_penalty: float) -> float:
        """Final penalty this override yields; delta overrides are read-only."""
        if self.mode == OverrideMode.DELTA:
            return auto_penalty + self.amount_iqd
        return self.amount_iqd

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> "LateOverride":
        mode = str(raw.get("mode") or OverrideMode.SET.value).lower()
        return cls(
            id=record_id(raw.get("id")),
            mode=OverrideMode.DELTA if mode == OverrideMode.DELTA.value else OverrideMode.SET,
            amount_iqd=to_number(raw.get("amount_iqd")),
            note=raw.get("note"),
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "mode": self.mode.value, "amount_iqd": self.amount_iqd, "note": self.note}


@dataclass(frozen=True)
class LateEvent:
    """A late arrival of one employee on one date, with its penalties."""

    date: str
    auto_penalty_iqd: float
    final_penalty_iqd: float
    check_in: Optional[str] = None
    rule: Optional[str] = None
    override: Optional[LateOverride] = None

    @property
    def state(self) -> OverrideState:
        return OverrideState.OVERRIDDEN if self.override else OverrideState.AUTOMATIC

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> "LateEvent":
        f = aliases.LATE_EVENT
        auto = to_number(first_present(raw, f["auto"]))
        override_raw = raw.get("override")
        override = LateOverride.from_json(override_raw) if isinstance(override_raw, Mapping) else None
        final = first_present(raw, f["final"])
        if final is None:
            final = override.apply(auto) if override else auto
        return cls(
            date=str(raw.get("date") or ""),
            check_in=raw.get("check_in"),
            auto_penalty_iqd=auto,
            final_penalty_iqd=to_number(final),
            rule=raw.get("rule"),
            override=override,
        )

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "check_in": self.check_in,
            "auto_penalty_iqd": self.auto_penalty_iqd,
            "final_penalty_iqd": self.final_penalty_iqd,
            "rule": self.rule,
            "state": self.state.value,
            "override": self.override.to_dict() if self.override else None,
        }


def late_penalties_by_day(events) -> dict[str, float]:
    return {e.date[:10]: e.final_penalty_iqd for e in events if e.date}
