"""Late-penalty override state machine for one (employee, date).

``Automatic`` means no override exists and the automatic penalty governs;
``Overridden`` means an override supersedes it. Saving a final amount equal
to the automatic one is the same as deleting the override, so the planner
emits a delete instead of storing a redundant ``amount_iqd == auto`` record.
The write path only ever emits ``mode="set"``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from ..common.coerce import to_number
from ..common.validators import require_amount, require_non_empty
from ..core.enums import OverrideAction, OverrideMode
from ..core.exceptions import ValidationError
from .model import LateEvent, LateOverride


@dataclass(frozen=True)
class OverridePlan:
    action: OverrideAction
    event: LateEvent
    override_id: Any = None
    payload: dict = field(default_factory=dict)
    reason: str = ""

    def result(self, created_id: Any = None) -> LateEvent:
        """The event as it looks once the write has been applied."""
        if self.action in (OverrideAction.NOOP, OverrideAction.DELETE):
            return replace(self.event, final_penalty_iqd=self.event.auto_penalty_iqd, override=None)
        amount = self.payload["amount_iqd"]
        override = LateOverride(
            id=self.override_id if self.action == OverrideAction.UPDATE else created_id,
            mode=OverrideMode.SET,
            amount_iqd=amount,
            note=self.reason,
        )
        return replace(self.event, final_penalty_iqd=amount, override=override)


def desired_amount(value: Any) -> Optional[float]:
    """Requested final penalty, clamped at 0; ``None`` when none was given."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    require_amount(value, "final_penalty_iqd")
    return max(0, to_number(value))


def plan_save(event: LateEvent, desired_final: Any, reason: Optional[str], *, uid: str) -> OverridePlan:
    """Decide which write (if any) brings ``event`` to ``desired_final``.

    A missing ``desired_final`` keeps the current final penalty.
    """
    note = require_non_empty(reason or "", "reason")
    desired = desired_amount(desired_final)
    if desired is None:
        desired = event.final_penalty_iqd
    auto = event.auto_penalty_iqd

    if desired == auto:
        if event.override and event.override.id:
            return OverridePlan(OverrideAction.DELETE, event, override_id=event.override.id, reason=note)
        return OverridePlan(OverrideAction.NOOP, event, reason=note)

    if event.override and event.override.id:
        payload = {"date": event.date, "mode": OverrideMode.SET.value, "amount_iqd": desired, "note": note}
        return OverridePlan(OverrideAction.UPDATE, event, override_id=event.override.id, payload=payload, reason=note)

    payload = {"uid": uid, "date": event.date, "mode": OverrideMode.SET.value, "amount_iqd": desired, "note": note}
    return OverridePlan(OverrideAction.CREATE, event, payload=payload, reason=note)


def plan_delete(event: LateEvent, reason: Optional[str]) -> OverridePlan:
    note = require_non_empty(reason or "", "reason")
    if not event.override or not event.override.id:
        raise ValidationError(f"no override to delete on {event.date}")
    return OverridePlan(OverrideAction.DELETE, event, override_id=event.override.id, reason=note)
