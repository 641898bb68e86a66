from __future__ import annotations

import pytest

from src.attendance_admin.attendance_admin.adjustments.service import AdvanceService, DeductionService, OtherAllowanceService
from src.attendance_admin.attendance_admin.core.enums import Role
from src.attendance_admin.attendance_admin.core.exceptions import ApiError, AuthorizationError, ValidationError
from src.attendance_admin.attendance_admin.endpoints.resolver import EndpointResolver


class FakeSender:
    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    async def send(self, spec):
        self.calls.append(spec)
        key = f"{spec.method} {spec.path}"
        if key not in self.routes:
            raise ApiError("Not Found", status=404, path=spec.url())
        result = self.routes[key]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.mark.asyncio
async def test_list_deductions_falls_through_to_payroll_family():
    sender = FakeSender({"GET /payroll/deductions": [{"id": 1, "amount": 10}]})

    deductions = await DeductionService(EndpointResolver(sender)).list_deductions(5, "2024-03-17")

    assert [d.amount for d in deductions] == [10]
    assert [s.path for s in sender.calls] == [
        "/employee_files/5/deductions",
        "/api/employee_files/5/deductions",
        "/payroll/deductions",
    ]
    assert sender.calls[0].query() == {"month": "2024-03"}


@pytest.mark.asyncio
async def test_list_deductions_without_endpoint_is_empty():
    assert await DeductionService(EndpointResolver(FakeSender())).list_deductions(5, "2024-03") == []


@pytest.mark.asyncio
async def test_list_deductions_hard_error_propagates():
    sender = FakeSender({"GET /employee_files/5/deductions": ApiError("boom", status=500)})

    with pytest.raises(ApiError):
        await DeductionService(EndpointResolver(sender)).list_deductions(5, "2024-03")


@pytest.mark.asyncio
async def test_create_deduction_body_and_fallthrough():
    sender = FakeSender({"POST /employees/5/deductions": {"id": 9}})

    result = await DeductionService(EndpointResolver(sender)).create(
        5, {"date": "2024-03-02", "amount": "1500", "reason": "broken tool"}, current_role=Role.HR
    )

    assert result == {"id": 9}
    assert sender.calls[-1].json == {"date": "2024-03-02", "amount_iqd": 1500.0, "note": "broken tool"}
    assert len(sender.calls) == 3


@pytest.mark.asyncio
async def test_create_deduction_validates_before_io():
    sender = FakeSender()
    service = DeductionService(EndpointResolver(sender))

    with pytest.raises(ValidationError):
        await service.create(5, {"amount": 1}, current_role=Role.HR)
    with pytest.raises(ValidationError):
        await service.create(5, {"month": "2024-03", "amount": "lots"}, current_role=Role.HR)
    assert sender.calls == []


@pytest.mark.asyncio
async def test_deduction_write_requires_editor_role():
    sender = FakeSender()

    with pytest.raises(AuthorizationError):
        await DeductionService(EndpointResolver(sender)).delete(5, 9, current_role=Role.ACCOUNTANT, reason="x")
    with pytest.raises(AuthorizationError):
        await DeductionService(EndpointResolver(sender)).create(
            5, {"month": "2024-03", "amount": 1}, current_role=""
        )
    assert sender.calls == []


@pytest.mark.asyncio
async def test_delete_deduction_carries_reason():
    sender = FakeSender({"DELETE /employee_files/5/deductions/9": None})

    await DeductionService(EndpointResolver(sender)).delete(5, 9, current_role=Role.ADMIN, reason=" duplicate ")

    assert sender.calls[0].url() == "/employee_files/5/deductions/9?reason=duplicate"


@pytest.mark.asyncio
async def test_list_advances():
    sender = FakeSender({"GET /api/employees/5/advances": {"data": [{"id": 1, "kind": "advance", "amount": 100}]}})

    advances = await AdvanceService(EndpointResolver(sender)).list_advances(5, "2024-03")

    assert [a.signed_amount for a in advances] == [100]
    assert sender.calls[-1].query() == {"month": "2024-03"}


@pytest.mark.asyncio
async def test_create_advance_requires_valid_kind_and_sends_both_amounts():
    sender = FakeSender({"POST /employee_files/5/advances": {"id": 3}})
    service = AdvanceService(EndpointResolver(sender))

    with pytest.raises(ValidationError):
        await service.create(5, {"date": "2024-03-01", "amount": 1, "kind": "gift"}, current_role=Role.ACCOUNTANT)

    await service.create(
        5, {"date": "2024-03-01", "amount_iqd": 250, "kind": "Advance"}, current_role=Role.ACCOUNTANT
    )

    assert sender.calls[-1].json == {"date": "2024-03-01", "amount_iqd": 250.0, "amount": 250.0, "kind": "advance"}


@pytest.mark.asyncio
async def test_hr_cannot_edit_advances():
    sender = FakeSender()

    with pytest.raises(AuthorizationError):
        await AdvanceService(EndpointResolver(sender)).update(5, 3, {"amount": 1}, current_role=Role.HR)
    assert sender.calls == []


@pytest.mark.asyncio
async def test_other_allowances_list_by_uid_and_month_range():
    sender = FakeSender({"GET /payroll/adjustments": [{"id": 1, "uid": "EMP005", "amount_iqd": 10000}]})

    items = await OtherAllowanceService(EndpointResolver(sender)).list_other_allowances("EMP005", "2024-02")

    assert [i.amount for i in items] == [10000]
    assert sender.calls[0].query() == {"uid": "EMP005", "from": "2024-02-01", "to": "2024-02-29"}


@pytest.mark.asyncio
async def test_create_other_allowance_fills_range_from_month():
    sender = FakeSender({"POST /api/payroll/adjustment": {"id": 8}})

    result = await OtherAllowanceService(EndpointResolver(sender)).create(
        "EMP005", {"month": "2024-03", "amount": "2500", "note": "phone"}, current_role=Role.HR
    )

    assert result == {"id": 8}
    assert sender.calls[-1].json == {
        "from": "2024-03-01",
        "to": "2024-03-31",
        "uid": "EMP005",
        "amount_iqd": 2500.0,
        "note": "phone",
    }


@pytest.mark.asyncio
async def test_other_allowance_writes_validate_and_check_role_before_io():
    sender = FakeSender()
    service = OtherAllowanceService(EndpointResolver(sender))

    with pytest.raises(ValidationError):
        await service.create("EMP005", {"amount_iqd": 1}, current_role=Role.HR)
    with pytest.raises(ValidationError):
        await service.create("EMP005", {"month": "2024-03", "amount_iqd": "lots"}, current_role=Role.HR)
    with pytest.raises(AuthorizationError):
        await service.delete("EMP005", 4, current_role=Role.VIEWER)
    assert sender.calls == []


@pytest.mark.asyncio
async def test_update_and_delete_other_allowance():
    sender = FakeSender({"PUT /payroll/adjustment/4": {"ok": True}, "DELETE /payroll/adjustment/4": None})
    service = OtherAllowanceService(EndpointResolver(sender))

    await service.update("EMP005", 4, {"amount_iqd": 700, "uid": "OTHER"}, current_role=Role.ADMIN)
    await service.delete("EMP005", 4, current_role=Role.ADMIN)

    assert sender.calls[0].json == {"amount_iqd": 700.0}
    assert sender.calls[1].method == "DELETE"
