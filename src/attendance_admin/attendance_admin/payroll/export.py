from __future__ import annotations

import io
from dataclasses import asdict

import pandas as pd

from .model import PayrollMonth

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

DAILY_COLUMNS = ["day", "hours", "food_allowance", "other_allowance", "deductions", "late_penalty", "advance"]
TOTAL_FIELDS = [
    "hours_total",
    "food_allowance",
    "other_allowance",
    "deductions",
    "late_penalty",
    "advances",
    "total_pay",
]


def payroll_workbook(payroll: PayrollMonth) -> io.BytesIO:
    """Render a payroll month as an in-memory xlsx (``Daily`` + ``Totals`` sheets)."""
    daily = pd.DataFrame([asdict(r) for r in payroll.rows], columns=DAILY_COLUMNS)
    totals = pd.DataFrame(
        [{"field": name, "value": getattr(payroll, name)} for name in TOTAL_FIELDS],
        columns=["field", "value"],
    )

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        daily.to_excel(writer, index=False, sheet_name="Daily")
        totals.to_excel(writer, index=False, sheet_name="Totals")
    output.seek(0)
    return output


def workbook_filename(employee_uid: str, month: str) -> str:
    return f"payroll_{employee_uid}_{month}.xlsx".replace(" ", "_")
