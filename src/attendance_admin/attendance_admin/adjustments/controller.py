from __future__ import annotations

from flask import Flask, request

from ..common.http import current_role, json_errors, ok
from ..container import Container


def _reason() -> str:
    body = request.get_json(silent=True) or {}
    return request.args.get("reason") or body.get("reason") or ""


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<employee_id>/deductions", methods=["GET"], endpoint="employee_deductions")
    @json_errors
    async def employee_deductions(employee_id: str):
        employee = await container.employee_service.ref_for(employee_id, uid=request.args.get("uid"))
        deductions = await container.payroll_service.deductions_with_fallback(employee, request.args.get("month"))
        return ok([d.to_dict() for d in deductions])

    @app.route("/api/employees/<employee_id>/deductions", methods=["POST"], endpoint="employee_deductions_create")
    @json_errors
    async def employee_deductions_create(employee_id: str):
        result = await container.deduction_service.create(
            employee_id, request.get_json(silent=True) or {}, current_role=current_role()
        )
        return ok(result, 201)

    @app.route(
        "/api/employees/<employee_id>/deductions/<deduction_id>",
        methods=["PUT"],
        endpoint="employee_deductions_update",
    )
    @json_errors
    async def employee_deductions_update(employee_id: str, deduction_id: str):
        result = await container.deduction_service.update(
            employee_id, deduction_id, request.get_json(silent=True) or {}, current_role=current_role()
        )
        return ok(result)

    @app.route(
        "/api/employees/<employee_id>/deductions/<deduction_id>",
        methods=["DELETE"],
        endpoint="employee_deductions_delete",
    )
    @json_errors
    async def employee_deductions_delete(employee_id: str, deduction_id: str):
        await container.deduction_service.delete(
            employee_id, deduction_id, current_role=current_role(), reason=_reason()
        )
        return ok()

    @app.route("/api/employees/<employee_id>/advances", methods=["GET"], endpoint="employee_advances")
    @json_errors
    async def employee_advances(employee_id: str):
        advances = await container.advance_service.list_advances(employee_id, request.args.get("month"))
        return ok([a.to_dict() for a in advances])

    @app.route("/api/employees/<employee_id>/advances", methods=["POST"], endpoint="employee_advances_create")
    @json_errors
    async def employee_advances_create(employee_id: str):
        result = await container.advance_service.create(
            employee_id, request.get_json(silent=True) or {}, current_role=current_role()
        )
        return ok(result, 201)

    @app.route(
        "/api/employees/<employee_id>/advances/<advance_id>",
        methods=["PUT"],
        endpoint="employee_advances_update",
    )
    @json_errors
    async def employee_advances_update(employee_id: str, advance_id: str):
        result = await container.advance_service.update(
            employee_id, advance_id, request.get_json(silent=True) or {}, current_role=current_role()
        )
        return ok(result)

    @app.route(
        "/api/employees/<employee_id>/advances/<advance_id>",
        methods=["DELETE"],
        endpoint="employee_advances_delete",
    )
    @json_errors
    async def employee_advances_delete(employee_id: str, advance_id: str):
        await container.advance_service.delete(employee_id, advance_id, current_role=current_role(), reason=_reason())
        return ok()

    @app.route("/api/employees/<employee_id>/other-allowances", methods=["GET"], endpoint="employee_other_allowances")
    @json_errors
    async def employee_other_allowances(employee_id: str):
        employee = await container.employee_service.ref_for(employee_id, uid=request.args.get("uid"))
        items = await container.other_allowance_service.list_other_allowances(
            employee.payroll_uid, request.args.get("month")
        )
        return ok([i.to_dict() for i in items])

    @app.route(
        "/api/employees/<employee_id>/other-allowances",
        methods=["POST"],
        endpoint="employee_other_allowances_create",
    )
    @json_errors
    async def employee_other_allowances_create(employee_id: str):
        employee = await container.employee_service.ref_for(employee_id, uid=request.args.get("uid"))
        result = await container.other_allowance_service.create(
            employee.payroll_uid, request.get_json(silent=True) or {}, current_role=current_role()
        )
        return ok(result, 201)

    @app.route(
        "/api/employees/<employee_id>/other-allowances/<item_id>",
        methods=["PUT"],
        endpoint="employee_other_allowances_update",
    )
    @json_errors
    async def employee_other_allowances_update(employee_id: str, item_id: str):
        result = await container.other_allowance_service.update(
            employee_id, item_id, request.get_json(silent=True) or {}, current_role=current_role()
        )
        return ok(result)

    @app.route(
        "/api/employees/<employee_id>/other-allowances/<item_id>",
        methods=["DELETE"],
        endpoint="employee_other_allowances_delete",
    )
    @json_errors
    async def employee_other_allowances_delete(employee_id: str, item_id: str):
        await container.other_allowance_service.delete(employee_id, item_id, current_role=current_role())
        return ok()
