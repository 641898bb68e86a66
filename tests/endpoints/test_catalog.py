import pytest

from src.attendance_admin.attendance_admin.endpoints import catalog


def _urls(specs):
    return [f"{s.method} {s.url()}" for s in specs]


def test_payroll_month_candidates_in_order():
    specs = catalog.payroll_month(employee_id=7, employee_uid="EMP007", month="2024-02")

    assert _urls(specs) == [
        "GET /employee_files/payroll?employee_id=7&month=2024-02",
        "GET /api/employee_files/payroll?employee_id=7&month=2024-02",
        "GET /payroll?employee_uid=EMP007&from=2024-02-01&to=2024-02-29",
        "GET /api/payroll?employee_uid=EMP007&from=2024-02-01&to=2024-02-29",
        "GET /payroll?employee_id=7&from=2024-02-01&to=2024-02-29",
        "GET /api/payroll?employee_id=7&from=2024-02-01&to=2024-02-29",
        "GET /payroll?employee_uid=EMP007&month=2024-02",
        "GET /api/payroll?employee_uid=EMP007&month=2024-02",
        "GET /payroll?employee_id=7&month=2024-02",
        "GET /api/payroll?employee_id=7&month=2024-02",
    ]


def test_logs_candidates_share_params_and_skip_empty_ones():
    specs = catalog.logs(employee_id=3, date_from="2024-03-01T00:00:00")

    assert [s.path for s in specs] == [
        "/employee_files/logs",
        "/logs",
        "/api/employee_files/logs",
        "/api/logs",
    ]
    assert specs[0].query() == {
        "employee_id": "3",
        "date_from": "2024-03-01T00:00:00",
        "page": "1",
        "page_size": "1000",
        "sort": "desc",
    }


def test_deductions_list_candidates():
    specs = catalog.deductions_list(employee_id=5, month="2024-03")
    assert _urls(specs) == [
        "GET /employee_files/5/deductions?month=2024-03",
        "GET /api/employee_files/5/deductions?month=2024-03",
        "GET /payroll/deductions?employee_id=5&month=2024-03",
        "GET /api/payroll/deductions?employee_id=5&month=2024-03",
    ]


def test_adjustment_write_reason_only_on_delete():
    put = catalog.adjustment_write("deductions", "PUT", employee_id=5, item_id=9, body={"amount_iqd": 1}, reason="x")
    delete = catalog.adjustment_write("deductions", "DELETE", employee_id=5, item_id=9, reason="typo")

    assert _urls(put) == [
        "PUT /employee_files/5/deductions/9",
        "PUT /api/employee_files/5/deductions/9",
        "PUT /employees/5/deductions/9",
        "PUT /api/employees/5/deductions/9",
    ]
    assert all(s.json == {"amount_iqd": 1} for s in put)
    assert _urls(delete)[0] == "DELETE /employee_files/5/deductions/9?reason=typo"
    assert all(s.json is None for s in delete)


def test_adjustment_write_rejects_unknown_kind():
    with pytest.raises(ValueError):
        catalog.adjustment_write("bonuses", "POST", employee_id=1)


def test_late_override_requests():
    assert _urls(catalog.late_override_create({"a": 1})) == ["POST /payroll/late_override"]
    assert _urls(catalog.late_override_update(4, {"a": 1})) == ["PUT /payroll/late_override/4"]
    assert _urls(catalog.late_override_delete(4, reason="wrong day")) == [
        "DELETE /payroll/late_override/4?reason=wrong+day"
    ]


def test_salary_history_candidates():
    assert _urls(catalog.salary_history(employee_id=2)) == [
        "GET /employee_files/2/salary_history",
        "GET /payroll?employee_id=2",
        "GET /api/employee_files/2/salary_history",
        "GET /api/payroll?employee_id=2",
    ]


def test_export_logs_url():
    assert catalog.export_logs_url("http://hr.local/", employee_id=3, date_from="2024-03-01") == (
        "http://hr.local/exports/logs.xlsx?employee_id=3&from=2024-03-01"
    )


def test_branch_payroll_candidates_skip_missing_branch():
    assert _urls(catalog.branch_payroll(date_from="2024-03-01", date_to="2024-03-31")) == [
        "GET /payroll?from=2024-03-01&to=2024-03-31",
        "GET /api/payroll?from=2024-03-01&to=2024-03-31",
    ]
    assert _urls(catalog.branch_payroll(date_from="2024-03-01", date_to="2024-03-31", branch="Basra"))[0] == (
        "GET /payroll?from=2024-03-01&to=2024-03-31&branch=Basra"
    )


def test_payroll_by_uid_range_candidates():
    assert _urls(catalog.payroll_by_uid_range(employee_uid="EMP002", month="2024-02")) == [
        "GET /payroll?employee_uid=EMP002&from=2024-02-01&to=2024-02-29",
        "GET /api/payroll?employee_uid=EMP002&from=2024-02-01&to=2024-02-29",
    ]


def test_other_allowance_requests():
    assert _urls(catalog.other_allowances_list(employee_uid="EMP002", date_from="2024-03-01", date_to="2024-03-31")) == [
        "GET /payroll/adjustments?uid=EMP002&from=2024-03-01&to=2024-03-31",
        "GET /api/payroll/adjustments?uid=EMP002&from=2024-03-01&to=2024-03-31",
    ]
    assert _urls(catalog.other_allowance_write("POST", body={"amount_iqd": 1})) == [
        "POST /payroll/adjustment",
        "POST /api/payroll/adjustment",
    ]
    assert _urls(catalog.other_allowance_write("DELETE", item_id=6))[0] == "DELETE /payroll/adjustment/6"
