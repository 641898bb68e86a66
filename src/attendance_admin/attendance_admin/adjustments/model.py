from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

from ..common.coerce import as_mapping, first_present, to_number
from ..core.enums import AdvanceKind
from ..normalize import aliases


def _created_by(raw: Mapping[str, Any]) -> Optional[str]:
    for key in aliases.CREATED_BY:
        value = raw.get(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            name = first_present(value, aliases.CREATED_BY_USER_NAME)
            if name:
                return str(name)
            continue
        return str(value)
    return None


@dataclass(frozen=True)
class Deduction:
    """Manual deduction; ``note`` is the only persisted reason field."""

    id: Any
    amount: float
    date: Optional[str] = None
    month: Optional[str] = None
    note: Optional[str] = None
    created_at: Optional[str] = None
    created_by: Optional[str] = None

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> "Deduction":
        f = aliases.DEDUCTION
        created_at = first_present(raw, f["created_at"])
        date = first_present(raw, f["date"])
        if date is None and isinstance(created_at, str):
            date = created_at[:10]
        return cls(
            id=first_present(raw, ("id", "deduction_id")),
            amount=to_number(first_present(raw, f["amount"])),
            date=date,
            month=first_present(raw, f["month"]),
            note=first_present(raw, f["note"]),
            created_at=created_at,
            created_by=_created_by(raw),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Advance:
    """Salary advance (positive) or repayment (negative once signed)."""

    id: Any
    date: Optional[str]
    kind: AdvanceKind
    amount: float
    note: str = ""
    created_at: Optional[str] = None
    created_by: Optional[str] = None

    @property
    def signed_amount(self) -> float:
        return self.amount if self.kind == AdvanceKind.ADVANCE else -self.amount

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> "Advance":
        f = aliases.ADVANCE
        kind = str(first_present(raw, f["kind"]) or AdvanceKind.REPAYMENT.value).lower()
        return cls(
            id=raw.get("id"),
            date=raw.get("date"),
            kind=AdvanceKind.ADVANCE if kind == AdvanceKind.ADVANCE.value else AdvanceKind.REPAYMENT,
            amount=to_number(first_present(raw, f["amount"])),
            note=first_present(raw, f["note"]) or "",
            created_at=raw.get("created_at"),
            created_by=_created_by(raw),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


def deduction_body(data: Mapping[str, Any]) -> dict:
    """Write payload: ``reason`` is folded into ``note`` and never sent."""
    body = {k: v for k, v in as_mapping(data).items() if k != "reason"}
    reason = data.get("reason")
    if reason and not body.get("note"):
        body["note"] = reason
    if "amount" in body:
        body.setdefault("amount_iqd", body.pop("amount"))
    return body


def advance_body(data: Mapping[str, Any]) -> dict:
    body = deduction_body(data)
    if "amount_iqd" in body:
        body["amount"] = body["amount_iqd"]
    if "kind" in body and isinstance(body["kind"], AdvanceKind):
        body["kind"] = body["kind"].value
    return body


def advances_by_day(advances) -> dict[str, float]:
    """Signed advance totals per ISO day (advances add, repayments subtract)."""
    out: dict[str, float] = {}
    for a in advances:
        day = str(a.date or "")[:10]
        if not day:
            continue
        out[day] = out.get(day, 0) + a.signed_amount
    return out


@dataclass(frozen=True)
class OtherAllowance:
    """Lump-sum "other" allowance granted over a date range."""

    id: Any
    amount: float
    uid: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    note: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_json(cls, raw: Mapping[str, Any]) -> "OtherAllowance":
        f = aliases.OTHER_ALLOWANCE
        return cls(
            id=raw.get("id"),
            amount=to_number(first_present(raw, f["amount"])),
            uid=raw.get("uid"),
            date_from=first_present(raw, f["date_from"]),
            date_to=first_present(raw, f["date_to"]),
            note=raw.get("note"),
            created_at=raw.get("created_at"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


def other_allowance_body(data: Mapping[str, Any]) -> dict:
    """Write payload with ``from``/``to`` keys and the amount as ``amount_iqd``."""
    body = deduction_body(data)
    for key, alias in (("from", "date_from"), ("to", "date_to")):
        if alias in body:
            body.setdefault(key, body.pop(alias))
    return body
