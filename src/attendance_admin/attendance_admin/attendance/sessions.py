"""Turn raw device feeds into IN/OUT sessions.

Feeds come in two flavors: rows that already describe a session (an IN
and/or OUT column under one of many names) and single-punch streams. The
first kind only gets its columns renamed to ``in``/``out``; the second is
paired in timestamp order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ..common.coerce import first_present
from ..common.datetime_utils import parse_timestamp
from ..core.enums import PunchType
from .model import Session

IN_KEYS = (
    "in", "in_time", "checkin", "datein", "date_in",
    "timein", "time_in", "datetime_in", "punch_in", "enter", "entry",
)
OUT_KEYS = (
    "out", "out_time", "checkout", "dateout", "date_out",
    "timeout", "time_out", "datetime_out", "punch_out", "exit",
)
TS_KEYS = (
    "ts", "timestamp", "time", "date", "datetime", "at",
    "created_at", "updated_at", "event_time", "log_time",
    "datein", "date_in", "dateout", "date_out", "timein", "time_in", "timeout", "time_out",
)
DEVICE_KEYS = ("device", "dev", "reader", "source", "device_name")
TYPE_KEYS = ("type", "event", "status", "direction", "io", "action")

_IN_WORDS = frozenset({"in", "checkin", "ci", "enter", "entered", "clockin", "start", "signin"})
_OUT_WORDS = frozenset({"out", "checkout", "co", "exit", "exited", "clockout", "end", "signout"})
# Only these keys may carry 1/0 style flags.
_FLAG_KEYS = frozenset({"io", "inout", "direction", "action", "status", "mode", "event"})


@dataclass(frozen=True)
class Punch:
    ts: str
    type: Optional[PunchType] = None
    device: Optional[str] = None


def punch_type(value: Any, key: str = "") -> Optional[PunchType]:
    if value is None:
        return None
    if isinstance(value, bool):
        return PunchType.IN if value else PunchType.OUT
    if isinstance(value, (int, float)):
        return {1: PunchType.IN, 0: PunchType.OUT}.get(value)

    text = str(value).strip().lower()
    if text in _IN_WORDS:
        return PunchType.IN
    if text in _OUT_WORDS:
        return PunchType.OUT
    if key.lower() in _FLAG_KEYS:
        if text in ("1", "in1", "io1", "true"):
            return PunchType.IN
        if text in ("0", "out0", "io0", "false"):
            return PunchType.OUT
    return None


def looks_like_sessions(row: Any) -> bool:
    if not isinstance(row, Mapping):
        return False
    return any(k in row for k in IN_KEYS) or any(k in row for k in OUT_KEYS)


def normalize_session_row(row: Mapping[str, Any]) -> dict:
    out = dict(row)
    in_at = first_present(out, IN_KEYS)
    out_at = first_present(out, OUT_KEYS)
    if in_at and "in" not in out:
        out["in"] = in_at
    if out_at and "out" not in out:
        out["out"] = out_at
    return out


def _to_punch(row: Mapping[str, Any]) -> Punch:
    kind = None
    for key in TYPE_KEYS:
        kind = punch_type(row.get(key), key)
        if kind is not None:
            break
    ts = first_present(row, ("in", "out")) or first_present(row, TS_KEYS)
    return Punch(ts=str(ts) if ts else "", type=kind, device=first_present(row, DEVICE_KEYS))


def _sort_key(punch: Punch):
    parsed = parse_timestamp(punch.ts)
    if parsed is None:
        return (1, 0.0, punch.ts)
    return (0, parsed.timestamp(), punch.ts)


def pair_punches(punches: Sequence[Punch]) -> list[Session]:
    """Pair punches in order; untyped streams alternate IN, OUT, IN, ..."""
    if not any(p.type is not None for p in punches):
        punches = [
            Punch(p.ts, PunchType.IN if i % 2 == 0 else PunchType.OUT, p.device)
            for i, p in enumerate(punches)
        ]

    sessions: list[Session] = []
    open_in: Optional[Punch] = None
    for p in punches:
        if p.type == PunchType.IN:
            if open_in:
                sessions.append(Session(in_at=open_in.ts, device=open_in.device))
            open_in = p
        elif p.type == PunchType.OUT:
            if open_in:
                sessions.append(Session(in_at=open_in.ts, out_at=p.ts, device=open_in.device))
                open_in = None
            else:
                sessions.append(Session(out_at=p.ts, device=p.device))
    if open_in:
        sessions.append(Session(in_at=open_in.ts, device=open_in.device))
    return sessions


def pair_logs_if_needed(rows: Sequence[Any]) -> list:
    """Session-shaped rows (as dicts) or paired ``Session`` objects.

    Rows already carrying in/out columns only get their aliases renamed.
    Anything without a usable timestamp is dropped from punch pairing; when
    nothing usable remains the input is returned unchanged.
    """
    if not rows:
        return list(rows)
    if looks_like_sessions(rows[0]):
        return [normalize_session_row(r) if isinstance(r, Mapping) else r for r in rows]

    punches = [_to_punch(r) for r in rows if isinstance(r, Mapping)]
    punches = [p for p in punches if p.ts]
    if not punches:
        return list(rows)
    punches.sort(key=_sort_key)
    return pair_punches(punches)
