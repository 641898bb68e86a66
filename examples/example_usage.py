"""Example: use the service layer directly (no Flask).

Controllers stay thin; the payroll view is assembled by the services.
"""

import asyncio
import importlib
import sys

from config import get_settings_module

from src.attendance_admin.attendance_admin.container import build_container


async def main(employee_id: str, month: str = None):
    settings = importlib.import_module(get_settings_module())
    container = build_container(api_config=settings.API_CONFIG)

    employee = await container.employee_service.ref_for(employee_id)
    payroll = await container.payroll_service.get_month(employee, month)
    print(payroll.to_dict())


if __name__ == "__main__":
    asyncio.run(main(*sys.argv[1:3]))
