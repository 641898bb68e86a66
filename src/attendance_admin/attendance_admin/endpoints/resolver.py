from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol, Sequence

from ..core.exceptions import ApiError, NoVariantSucceeded
from ..transport.request import RequestSpec

logger = logging.getLogger(__name__)


class Sender(Protocol):
    async def send(self, spec: RequestSpec) -> Any:
        raise NotImplementedError


class EndpointResolver:
    """Try candidate requests strictly in order until one succeeds.

    A failure with status 401/403/404/405 is soft and moves on to the next
    candidate. Anything else stops immediately and propagates. There are no
    retries and no backoff: this discovers which endpoint shape the backend
    speaks, it is not a resilience layer.
    """

    def __init__(self, sender: Sender):
        self._sender = sender

    async def resolve(
        self,
        candidates: Sequence[RequestSpec],
        *,
        accept: Optional[Callable[[Any], bool]] = None,
    ) -> Any:
        last: Optional[ApiError] = None
        tried: list[str] = []
        for spec in candidates:
            tried.append(f"{spec.method} {spec.url()}")
            try:
                data = await self._sender.send(spec)
            except ApiError as e:
                if not e.is_soft:
                    raise
                logger.debug("soft failure %s on %s %s, trying next", e.status, spec.method, spec.url())
                last = e
                continue

            if accept is not None and not accept(data):
                logger.debug("%s %s answered but was rejected, trying next", spec.method, spec.url())
                last = ApiError("response did not match the request", status=None, data=data, path=spec.url())
                continue
            return data

        raise NoVariantSucceeded(last, tried=tried)
