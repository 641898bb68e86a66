from __future__ import annotations

from flask import Flask, request

from ..common.http import current_role, json_errors, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<employee_id>/late-events", methods=["GET"], endpoint="employee_late_events")
    @json_errors
    async def employee_late_events(employee_id: str):
        events = await container.late_override_service.list_events(employee_id, request.args.get("month"))
        return ok([e.to_dict() for e in events])

    @app.route(
        "/api/employees/<employee_id>/late-events/<day>/override",
        methods=["PUT"],
        endpoint="employee_late_override_save",
    )
    @json_errors
    async def employee_late_override_save(employee_id: str, day: str):
        body = request.get_json(silent=True) or {}
        event = await container.late_override_service.save_for_date(
            employee_id,
            day,
            body.get("final_penalty_iqd"),
            body.get("reason"),
            current_role=current_role(),
            uid=body.get("uid"),
        )
        return ok(event.to_dict())

    @app.route(
        "/api/employees/<employee_id>/late-events/<day>/override",
        methods=["DELETE"],
        endpoint="employee_late_override_delete",
    )
    @json_errors
    async def employee_late_override_delete(employee_id: str, day: str):
        body = request.get_json(silent=True) or {}
        event = await container.late_override_service.delete_for_date(
            employee_id,
            day,
            request.args.get("reason") or body.get("reason"),
            current_role=current_role(),
        )
        return ok(event.to_dict())
