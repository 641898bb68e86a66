from __future__ import annotations

from flask import Flask, request, send_file

from ..common.http import json_errors, ok
from ..container import Container
from .export import XLSX_MIMETYPE, payroll_workbook, workbook_filename


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll", methods=["GET"], endpoint="branch_payroll")
    @json_errors
    async def branch_payroll():
        rows = await container.payroll_service.list_branch(
            request.args.get("month"),
            date_from=request.args.get("from"),
            date_to=request.args.get("to"),
            branch=request.args.get("branch"),
        )
        return ok([r.to_dict() for r in rows])

    @app.route("/api/employees/<employee_id>/payroll", methods=["GET"], endpoint="employee_payroll")
    @json_errors
    async def employee_payroll(employee_id: str):
        employee = await container.employee_service.ref_for(employee_id, uid=request.args.get("uid"))
        payroll = await container.payroll_service.get_month(employee, request.args.get("month"))
        return ok(payroll.to_dict())

    @app.route("/api/employees/<employee_id>/payroll/export", methods=["GET"], endpoint="employee_payroll_export")
    @json_errors
    async def employee_payroll_export(employee_id: str):
        employee = await container.employee_service.ref_for(employee_id, uid=request.args.get("uid"))
        payroll = await container.payroll_service.get_month(employee, request.args.get("month"))
        return send_file(
            payroll_workbook(payroll),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=workbook_filename(employee.payroll_uid, payroll.month),
        )
