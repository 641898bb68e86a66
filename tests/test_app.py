from __future__ import annotations

import io
import json

import httpx
import pandas as pd
import pytest

from src.attendance_admin.attendance_admin.container import build_container
from src.attendance_admin.attendance_admin.main import create_app


class Backend:
    """In-memory HR backend answering through ``httpx.MockTransport``."""

    def __init__(self, routes):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.method} {request.url.path}"
        if key not in self.routes:
            return httpx.Response(404, json={"detail": "not here"})
        status, body = self.routes[key]
        return httpx.Response(status, json=body) if body is not None else httpx.Response(status)


@pytest.fixture
def backend():
    return Backend({
        "GET /employees/7": (200, {"id": 7, "uid": "emp007"}),
        "GET /employee_files/payroll": (
            200,
            {"month": "2024-03", "hours_total": 8, "rows": [{"date": "2024-03-01", "hours": 8, "deductions": 250}]},
        ),
        "GET /employee_files/7/late_events": (
            200,
            [{"date": "2024-03-01", "auto_penalty_iqd": 2000, "override": {"id": 4, "mode": "set", "amount_iqd": 500}}],
        ),
        "PUT /payroll/late_override/4": (200, {"ok": True}),
        "POST /employee_files/7/deductions": (422, {"detail": "month is closed"}),
        "GET /employee_files/7/salary_history": (200, {"items": [{"month": "2024-01", "gross": 900000}]}),
    })


@pytest.fixture
def client(monkeypatch, backend):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_container(
        api_config={"base_url": "http://backend.test", "token": "t0k"},
        transport=httpx.MockTransport(backend),
    )
    app = create_app(container)
    return app.test_client()


def test_payroll_endpoint(client, backend):
    res = client.get("/api/employees/7/payroll?month=2024-03")

    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["hours_total"] == 8
    assert data["late_penalty"] == 0
    assert data["rows"][0]["late_penalty"] == 500
    assert backend.requests[0].headers["authorization"] == "Bearer t0k"


def test_payroll_not_found_maps_to_404(client, backend):
    del backend.routes["GET /employee_files/payroll"]

    res = client.get("/api/employees/7/payroll?month=2024-03")

    assert res.status_code == 404
    assert res.get_json()["success"] is False
    assert len(res.get_json()["tried"]) == 10


def test_payroll_export_returns_workbook(client):
    res = client.get("/api/employees/7/payroll/export?month=2024-03")

    assert res.status_code == 200
    assert "payroll_EMP007_2024-03.xlsx" in res.headers["Content-Disposition"]
    daily = pd.read_excel(io.BytesIO(res.data), sheet_name="Daily", engine="openpyxl")
    assert list(daily["hours"]) == [8]


def test_deductions_fall_back_to_payroll_rows(client):
    res = client.get("/api/employees/7/deductions?month=2024-03")

    assert res.status_code == 200
    assert [(d["date"], d["amount"]) for d in res.get_json()["data"]] == [("2024-03-01", 250)]


def test_override_save_requires_role(client, backend):
    res = client.put(
        "/api/employees/7/late-events/2024-03-01/override",
        json={"final_penalty_iqd": 0, "reason": "approved"},
        headers={"X-Role": "viewer"},
    )

    assert res.status_code == 403
    assert backend.requests == []


def test_override_save_without_reason_is_400_and_offline(client, backend):
    res = client.put(
        "/api/employees/7/late-events/2024-03-01/override",
        json={"final_penalty_iqd": 0, "reason": "  "},
        headers={"X-Role": "hr"},
    )

    assert res.status_code == 400
    assert backend.requests == []


def test_override_save_updates_existing(client, backend):
    res = client.put(
        "/api/employees/7/late-events/2024-03-01/override",
        json={"final_penalty_iqd": 0, "reason": "approved"},
        headers={"X-Role": "HR"},
    )

    assert res.status_code == 200
    event = res.get_json()["data"]
    assert event["final_penalty_iqd"] == 0
    assert event["state"] == "overridden"
    assert backend.requests[-1].method == "PUT"


def test_upstream_hard_error_keeps_status(client):
    res = client.post(
        "/api/employees/7/deductions",
        json={"month": "2024-03", "amount": 100},
        headers={"X-Role": "admin"},
    )

    assert res.status_code == 422
    assert res.get_json()["message"] == "month is closed"


def test_salary_history(client):
    res = client.get("/api/employees/7/salary-history")

    assert res.get_json()["data"][0]["effective_from"] == "2024-01"
    assert res.get_json()["data"][0]["salary_iqd"] == 900000


def test_logs_export_url(client):
    res = client.get("/api/employees/7/logs/export?from=2024-03-01")

    assert res.get_json()["data"]["url"] == "http://backend.test/exports/logs.xlsx?employee_id=7&from=2024-03-01"


def test_override_save_with_non_numeric_amount_is_400_and_offline(client, backend):
    res = client.put(
        "/api/employees/7/late-events/2024-03-01/override",
        json={"final_penalty_iqd": "abc", "reason": "typo"},
        headers={"X-Role": "hr"},
    )

    assert res.status_code == 400
    assert backend.requests == []


def test_override_save_without_amount_keeps_final(client, backend):
    res = client.put(
        "/api/employees/7/late-events/2024-03-01/override",
        json={"reason": "note only"},
        headers={"X-Role": "hr"},
    )

    assert res.get_json()["data"]["final_penalty_iqd"] == 500
    assert backend.requests[-1].method == "PUT"


def test_branch_payroll(client, backend):
    backend.routes["GET /payroll"] = (200, [{"uid": "emp007", "branch": "Erbil", "totals": {"hours": 8}}])

    res = client.get("/api/payroll?from=2024-03-01&to=2024-03-15&branch=Erbil")

    assert res.status_code == 200
    assert res.get_json()["data"][0]["uid"] == "EMP007"
    assert dict(backend.requests[0].url.params) == {"from": "2024-03-01", "to": "2024-03-15", "branch": "Erbil"}


def test_other_allowance_create_uses_employee_uid(client, backend):
    backend.routes["POST /payroll/adjustment"] = (201, {"id": 12})

    res = client.post(
        "/api/employees/7/other-allowances",
        json={"month": "2024-03", "amount_iqd": 5000},
        headers={"X-Role": "admin"},
    )

    assert res.status_code == 201
    assert res.get_json()["data"] == {"id": 12}
    sent = json.loads(backend.requests[-1].content)
    assert sent["uid"] == "EMP007"
    assert (sent["from"], sent["to"]) == ("2024-03-01", "2024-03-31")
