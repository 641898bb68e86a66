from __future__ import annotations

from flask import Flask, request

from ..common.http import json_errors, ok
from ..container import Container
from ..endpoints.catalog import export_logs_url
from .sessions import pair_logs_if_needed


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<employee_id>/logs", methods=["GET"], endpoint="employee_logs")
    @json_errors
    async def employee_logs(employee_id: str):
        date_from = request.args.get("from")
        date_to = request.args.get("to")
        if request.args.get("paired") in ("1", "true"):
            raw = await container.log_service.fetch_raw_logs(employee_id, date_from, date_to)
            rows = pair_logs_if_needed(raw)
            return ok([r.to_dict() if hasattr(r, "to_dict") else r for r in rows])

        logs = await container.log_service.get_logs(employee_id, date_from, date_to)
        return ok([e.to_dict() for e in logs])

    @app.route("/api/employees/<employee_id>/overview", methods=["GET"], endpoint="employee_overview")
    @json_errors
    async def employee_overview(employee_id: str):
        overview = await container.log_service.get_overview(employee_id)
        return ok(overview.to_dict())

    @app.route("/api/employees/<employee_id>/logs/export", methods=["GET"], endpoint="employee_logs_export")
    def employee_logs_export(employee_id: str):
        url = export_logs_url(
            container.api_base_url,
            employee_id=employee_id,
            date_from=request.args.get("from"),
            date_to=request.args.get("to"),
        )
        return ok({"url": url})
