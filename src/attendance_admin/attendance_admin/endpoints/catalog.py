"""Candidate request lists per logical backend operation.

Every function here is pure: (operation, context) -> ordered candidates,
consumed by ``EndpointResolver``. Deployments disagree on routing, so most
operations list the proxy path first and the ``/api``-prefixed alternate
right after it.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from ..common.datetime_utils import month_range
from ..core.constants import DEFAULT_LOGS_PAGE_SIZE, DEFAULT_LOGS_SORT
from ..transport.request import RequestSpec, clean_params

ADJUSTMENT_KINDS = ("deductions", "advances")


def with_api_alternates(*specs: RequestSpec) -> list[RequestSpec]:
    """``[a, /api/a, b, /api/b, ...]``."""
    out: list[RequestSpec] = []
    for spec in specs:
        out.append(spec)
        out.append(spec.with_api_prefix())
    return out


def payroll_month(*, employee_id, employee_uid: str, month: str) -> list[RequestSpec]:
    date_from, date_to = month_range(month)
    return with_api_alternates(
        RequestSpec("GET", "/employee_files/payroll", {"employee_id": employee_id, "month": month}),
        RequestSpec("GET", "/payroll", {"employee_uid": employee_uid, "from": date_from, "to": date_to}),
        RequestSpec("GET", "/payroll", {"employee_id": employee_id, "from": date_from, "to": date_to}),
        RequestSpec("GET", "/payroll", {"employee_uid": employee_uid, "month": month}),
        RequestSpec("GET", "/payroll", {"employee_id": employee_id, "month": month}),
    )


def payroll_by_uid_range(*, employee_uid: str, month: str) -> list[RequestSpec]:
    """Single-employee payroll over the month's date range; carries per-day data."""
    date_from, date_to = month_range(month)
    return with_api_alternates(
        RequestSpec("GET", "/payroll", {"employee_uid": employee_uid, "from": date_from, "to": date_to}),
    )


def branch_payroll(*, date_from: str, date_to: str, branch: Optional[str] = None) -> list[RequestSpec]:
    return with_api_alternates(
        RequestSpec("GET", "/payroll", {"from": date_from, "to": date_to, "branch": branch}),
    )


def other_allowances_list(*, employee_uid: str, date_from: str, date_to: str) -> list[RequestSpec]:
    return with_api_alternates(
        RequestSpec("GET", "/payroll/adjustments", {"uid": employee_uid, "from": date_from, "to": date_to}),
    )


def other_allowance_write(method: str, *, item_id=None, body: Optional[Mapping[str, Any]] = None) -> list[RequestSpec]:
    suffix = f"/{item_id}" if item_id is not None else ""
    json = dict(body) if body is not None else None
    return with_api_alternates(RequestSpec(method, f"/payroll/adjustment{suffix}", json=json))


def logs(
    *,
    employee_id,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    page: int = 1,
    page_size: int = DEFAULT_LOGS_PAGE_SIZE,
    sort: str = DEFAULT_LOGS_SORT,
) -> list[RequestSpec]:
    params = {
        "employee_id": employee_id,
        "date_from": date_from,
        "date_to": date_to,
        "page": page,
        "page_size": page_size,
        "sort": sort,
    }
    return [
        RequestSpec("GET", "/employee_files/logs", params),
        RequestSpec("GET", "/logs", params),
        RequestSpec("GET", "/api/employee_files/logs", params),
        RequestSpec("GET", "/api/logs", params),
    ]


def deductions_list(*, employee_id, month: Optional[str]) -> list[RequestSpec]:
    return with_api_alternates(
        RequestSpec("GET", f"/employee_files/{employee_id}/deductions", {"month": month}),
        RequestSpec("GET", "/payroll/deductions", {"employee_id": employee_id, "month": month}),
    )


def advances_list(*, employee_id, month: Optional[str]) -> list[RequestSpec]:
    return with_api_alternates(
        RequestSpec("GET", f"/employee_files/{employee_id}/advances", {"month": month}),
        RequestSpec("GET", f"/employees/{employee_id}/advances", {"month": month}),
    )


def adjustment_write(
    kind: str,
    method: str,
    *,
    employee_id,
    item_id=None,
    body: Optional[Mapping[str, Any]] = None,
    reason: Optional[str] = None,
) -> list[RequestSpec]:
    """POST/PUT/DELETE on an employee's deductions or advances."""
    if kind not in ADJUSTMENT_KINDS:
        raise ValueError(f"unknown adjustment kind: {kind}")
    suffix = f"/{item_id}" if item_id is not None else ""
    params = {"reason": reason} if method == "DELETE" else {}
    json = dict(body) if body is not None else None
    return with_api_alternates(
        RequestSpec(method, f"/employee_files/{employee_id}/{kind}{suffix}", params, json),
        RequestSpec(method, f"/employees/{employee_id}/{kind}{suffix}", params, json),
    )


def late_events(*, employee_id, date_from: str, date_to: str) -> list[RequestSpec]:
    return with_api_alternates(
        RequestSpec("GET", f"/employee_files/{employee_id}/late_events", {"from": date_from, "to": date_to}),
        RequestSpec("GET", "/payroll/late_events", {"employee_id": employee_id, "from": date_from, "to": date_to}),
    )


def late_override_create(body: Mapping[str, Any]) -> list[RequestSpec]:
    return [RequestSpec("POST", "/payroll/late_override", json=dict(body))]


def late_override_update(override_id, body: Mapping[str, Any]) -> list[RequestSpec]:
    return [RequestSpec("PUT", f"/payroll/late_override/{override_id}", json=dict(body))]


def late_override_delete(override_id, *, reason: str) -> list[RequestSpec]:
    return [RequestSpec("DELETE", f"/payroll/late_override/{override_id}", {"reason": reason})]


def employee_overview(*, employee_id) -> list[RequestSpec]:
    return with_api_alternates(RequestSpec("GET", f"/employee_files/{employee_id}/overview"))


def employee_record(*, employee_id) -> list[RequestSpec]:
    return with_api_alternates(RequestSpec("GET", f"/employees/{employee_id}"))


def salary_history(*, employee_id) -> list[RequestSpec]:
    return [
        RequestSpec("GET", f"/employee_files/{employee_id}/salary_history"),
        RequestSpec("GET", "/payroll", {"employee_id": employee_id}),
        RequestSpec("GET", f"/api/employee_files/{employee_id}/salary_history"),
        RequestSpec("GET", "/api/payroll", {"employee_id": employee_id}),
    ]


def export_logs_url(base_url: str, *, employee_id, date_from: Optional[str] = None, date_to: Optional[str] = None) -> str:
    """Download URL of the server-side logs workbook."""
    q = clean_params({"employee_id": employee_id, "from": date_from, "to": date_to})
    return f"{base_url.rstrip('/')}/exports/logs.xlsx?{urlencode(q)}"
