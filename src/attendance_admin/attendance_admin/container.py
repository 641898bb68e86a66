from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import httpx

from .adjustments.service import AdvanceService, DeductionService, OtherAllowanceService
from .attendance.service import LogService
from .core.constants import DEFAULT_REQUEST_TIMEOUT, EDITOR_ROLES
from .employees.service import EmployeeService
from .endpoints.resolver import EndpointResolver
from .overrides.service import LateOverrideService
from .payroll.service import PayrollService
from .transport.auth import ChainedTokenProvider, EnvTokenProvider, StaticTokenProvider
from .transport.client import ApiClient


@dataclass(frozen=True)
class Container:
    api_base_url: str
    api_client: ApiClient
    resolver: EndpointResolver

    employee_service: EmployeeService
    log_service: LogService
    deduction_service: DeductionService
    advance_service: AdvanceService
    other_allowance_service: OtherAllowanceService
    late_override_service: LateOverrideService
    payroll_service: PayrollService


def build_container(
    *,
    api_config: dict,
    editor_roles: Optional[Iterable[str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Container:
    api_client = ApiClient(
        str(api_config["base_url"]),
        token_provider=ChainedTokenProvider(
            StaticTokenProvider(api_config.get("token") or None),
            EnvTokenProvider(),
        ),
        timeout=float(api_config.get("timeout", DEFAULT_REQUEST_TIMEOUT)),
        transport=transport,
    )
    resolver = EndpointResolver(api_client)
    roles = frozenset(editor_roles) if editor_roles else EDITOR_ROLES

    employee_service = EmployeeService(resolver)
    log_service = LogService(resolver)
    deduction_service = DeductionService(resolver, editor_roles=roles)
    advance_service = AdvanceService(resolver)
    other_allowance_service = OtherAllowanceService(resolver, editor_roles=roles)
    late_override_service = LateOverrideService(resolver, employees=employee_service, editor_roles=roles)
    payroll_service = PayrollService(
        resolver,
        logs=log_service,
        deductions=deduction_service,
        advances=advance_service,
        late_overrides=late_override_service,
    )

    return Container(
        api_base_url=api_client.base_url,
        api_client=api_client,
        resolver=resolver,
        employee_service=employee_service,
        log_service=log_service,
        deduction_service=deduction_service,
        advance_service=advance_service,
        other_allowance_service=other_allowance_service,
        late_override_service=late_override_service,
        payroll_service=payroll_service,
    )
