from __future__ import annotations

from dataclasses import asdict

from flask import Flask

from ..common.http import json_errors, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<employee_id>/salary-history", methods=["GET"], endpoint="employee_salary_history")
    @json_errors
    async def employee_salary_history(employee_id: str):
        history = await container.employee_service.salary_history(employee_id)
        return ok([asdict(h) for h in history])
