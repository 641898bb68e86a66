from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..core.constants import DEFAULT_REQUEST_TIMEOUT
from ..core.exceptions import ApiError
from .auth import StaticTokenProvider, TokenProvider, bearer
from .request import RequestSpec

logger = logging.getLogger(__name__)


def decode_body(response: httpx.Response) -> Any:
    """204 -> None, JSON content-type -> parsed JSON, anything else -> text."""
    if response.status_code == 204:
        return None
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


def error_message(response: httpx.Response, data: Any) -> str:
    if isinstance(data, dict):
        msg = data.get("detail") or data.get("message")
        if msg:
            return msg if isinstance(msg, str) else str(msg)
    return response.reason_phrase or f"HTTP {response.status_code}"


class ApiClient:
    """Thin async JSON client for the HR backend.

    A short-lived ``httpx.AsyncClient`` is opened per request so the client
    can be shared across event loops (Flask runs each async view in its own).
    """

    def __init__(
        self,
        base_url: str,
        *,
        token_provider: Optional[TokenProvider] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self._tokens = token_provider or StaticTokenProvider()
        self._timeout = timeout
        self._transport = transport

    def headers(self, *, json_body: bool) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if json_body:
            headers["Content-Type"] = "application/json"
        auth = bearer(self._tokens.get_token())
        if auth:
            headers["Authorization"] = auth
        return headers

    async def send(self, spec: RequestSpec) -> Any:
        """Issue one request; raise ``ApiError`` for non-2xx or transport failures."""
        json_body = spec.json is not None
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(
                    spec.method,
                    spec.path,
                    params=spec.query(),
                    json=spec.json if json_body else None,
                    headers=self.headers(json_body=json_body),
                )
            except httpx.HTTPError as e:
                logger.warning("%s %s failed: %s", spec.method, spec.url(), e)
                raise ApiError(str(e) or type(e).__name__, path=spec.url()) from e

        data = decode_body(response)
        if not response.is_success:
            raise ApiError(
                error_message(response, data),
                status=response.status_code,
                data=data,
                path=spec.url(),
            )
        return data
