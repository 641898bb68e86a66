from __future__ import annotations

import json

import httpx
import pytest

from src.attendance_admin.attendance_admin.core.exceptions import ApiError
from src.attendance_admin.attendance_admin.transport.auth import StaticTokenProvider
from src.attendance_admin.attendance_admin.transport.client import ApiClient
from src.attendance_admin.attendance_admin.transport.request import RequestSpec


def _client(handler, token="abc"):
    return ApiClient(
        "http://backend.test/",
        token_provider=StaticTokenProvider(token),
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_get_sends_headers_and_clean_query():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json={"ok": True})

    data = await _client(handler).send(
        RequestSpec("GET", "/payroll", {"employee_id": 7, "month": "2024-03", "uid": None, "from": ""})
    )

    request = seen["request"]
    assert data == {"ok": True}
    assert request.url.path == "/payroll"
    assert dict(request.url.params) == {"employee_id": "7", "month": "2024-03"}
    assert request.headers["accept"] == "application/json"
    assert request.headers["authorization"] == "Bearer abc"
    assert "content-type" not in request.headers


@pytest.mark.asyncio
async def test_json_body_sets_content_type():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(201, json={"id": 1})

    await _client(handler).send(RequestSpec("POST", "/payroll/late_override", json={"amount_iqd": 0}))

    request = seen["request"]
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == {"amount_iqd": 0}


@pytest.mark.asyncio
async def test_prefixed_token_is_passed_as_is_and_missing_token_omits_header():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    await _client(handler, token="Bearer xyz").send(RequestSpec("GET", "/a"))
    await _client(handler, token=None).send(RequestSpec("GET", "/a"))

    assert seen[0].headers["authorization"] == "Bearer xyz"
    assert "authorization" not in seen[1].headers


@pytest.mark.asyncio
async def test_no_content_and_text_bodies():
    responses = iter([httpx.Response(204), httpx.Response(200, text="plain")])

    client = _client(lambda request: next(responses))

    assert await client.send(RequestSpec("DELETE", "/x")) is None
    assert await client.send(RequestSpec("GET", "/x")) == "plain"


@pytest.mark.asyncio
async def test_error_message_from_detail():
    client = _client(lambda request: httpx.Response(422, json={"detail": "amount must be positive"}))

    with pytest.raises(ApiError) as exc:
        await client.send(RequestSpec("POST", "/employees/1/deductions", json={}))

    assert exc.value.status == 422
    assert exc.value.message == "amount must be positive"
    assert exc.value.data == {"detail": "amount must be positive"}
    assert exc.value.path == "/employees/1/deductions"
    assert not exc.value.is_soft


@pytest.mark.asyncio
async def test_error_message_falls_back_to_reason_phrase():
    client = _client(lambda request: httpx.Response(404, text="nope"))

    with pytest.raises(ApiError) as exc:
        await client.send(RequestSpec("GET", "/x"))

    assert exc.value.message == "Not Found"
    assert exc.value.is_soft


@pytest.mark.asyncio
async def test_network_failure_becomes_statusless_api_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ApiError) as exc:
        await _client(handler).send(RequestSpec("GET", "/x"))

    assert exc.value.status is None
    assert not exc.value.is_soft
