"""Alias tables: canonical field name -> accepted upstream keys, first wins."""

from __future__ import annotations

# Month totals, read from the record itself, then ``totals``, then ``summary``.
PAYROLL_TOTALS = {
    "hours_total": ("hours_total", "hours", "total_hours"),
    "food_allowance": ("food_allowance", "food_allowance_iqd"),
    "other_allowance": ("other_allowance", "other_allowance_iqd"),
    "deductions": ("deductions", "deductions_total", "deductions_iqd"),
    "late_penalty": ("late_penalty", "late_penalty_iqd"),
    "advances": ("advances", "advances_iqd"),
    "total_pay": ("total_pay", "net_pay", "total_pay_iqd"),
}

TOTALS_CONTAINERS = ("totals", "summary")

# Per-day rows: canonical key first, legacy short key after it.
DAY_ROW = {
    "hours": ("hours", "h", "total_hours"),
    "food_allowance": ("food_allowance", "food"),
    "other_allowance": ("other_allowance", "other"),
    "deductions": ("deductions", "deduct"),
    "late_penalty": ("late_penalty", "late"),
    "advance": ("advance", "advances"),
}

DAY_LABEL = ("day", "date")

ROW_LIST_SOURCES = ("rows", "days", "details", "daily", "days_by_date")

MONTH_FIELDS = ("month", "for_month", "period", "month_name")
FROM_FIELDS = ("from", "start", "date_from")
TO_FIELDS = ("to", "end", "date_to")

DEDUCTION = {
    "amount": ("amount_iqd", "amount", "value"),
    "note": ("note", "reason", "label", "description"),
    "date": ("date", "day", "for_date"),
    "month": ("month", "for_month"),
    "created_at": ("created_at", "createdAt", "inserted_at"),
}

CREATED_BY_USER_NAME = ("display_name", "name", "username")
CREATED_BY = ("created_by_name", "created_by_user", "user_name", "user", "created_by", "createdBy")

ADVANCE = {
    "amount": ("amount_iqd", "amount"),
    "note": ("note", "reason"),
    "kind": ("kind", "type"),
}

LATE_EVENT = {
    "auto": ("auto_penalty_iqd", "auto"),
    "final": ("final_penalty_iqd", "final"),
}

EMPLOYEE_META = ("meta", "employee", "employee_meta")

# Employee fields the food policy reads.
META_FIELDS = ("nationality", "employment_type", "country", "currency")

# Per-employee totals of the branch-wide payroll listing.
BRANCH_TOTALS = (
    "hours",
    "food_allowance_iqd",
    "other_allowance_iqd",
    "deductions_iqd",
    "late_penalty_iqd",
    "allowances_iqd",
    "base_salary_iqd",
    "total_pay_iqd",
)

OTHER_ALLOWANCE = {
    "amount": ("amount_iqd", "amount"),
    "date_from": ("date_from", "from"),
    "date_to": ("date_to", "to"),
}
