from __future__ import annotations

from ..core.exceptions import AuthorizationError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_amount(value, field_name: str = "amount") -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if amount != amount:
        raise ValidationError(f"{field_name} must be a number")
    return amount


def require_role(current_role, allowed) -> str:
    role = str(getattr(current_role, "value", current_role) or "").strip().lower()
    if role not in allowed:
        raise AuthorizationError("You do not have permission for this action")
    return role
