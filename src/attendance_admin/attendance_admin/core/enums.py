from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Admin console roles used for edit permissions."""

    ADMIN = "admin"
    HR = "hr"
    ACCOUNTANT = "accountant"
    VIEWER = "viewer"


class OverrideMode(str, Enum):
    """How a late-penalty override amount applies to the automatic penalty."""

    SET = "set"
    DELTA = "delta"


class OverrideAction(str, Enum):
    """Write issued by the late override reconciler."""

    NOOP = "noop"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class OverrideState(str, Enum):
    AUTOMATIC = "automatic"
    OVERRIDDEN = "overridden"


class AdvanceKind(str, Enum):
    ADVANCE = "advance"
    REPAYMENT = "repayment"


class PunchType(str, Enum):
    IN = "in"
    OUT = "out"
