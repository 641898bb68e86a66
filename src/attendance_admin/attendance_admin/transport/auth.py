from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

_BEARER_RE = re.compile(r"^bearer\s", re.IGNORECASE)

DEFAULT_TOKEN_ENV_VARS = ("API_TOKEN", "JWT", "ACCESS_TOKEN", "AUTH_TOKEN")


class TokenProvider(Protocol):
    def get_token(self) -> Optional[str]:
        raise NotImplementedError


def bearer(token: Optional[str]) -> Optional[str]:
    """Authorization header value; tokens already carrying ``Bearer`` pass through."""
    t = (token or "").strip()
    if not t:
        return None
    return t if _BEARER_RE.match(t) else f"Bearer {t}"


@dataclass(frozen=True)
class StaticTokenProvider:
    token: Optional[str] = None

    def get_token(self) -> Optional[str]:
        return self.token or None


@dataclass(frozen=True)
class EnvTokenProvider:
    names: Sequence[str] = DEFAULT_TOKEN_ENV_VARS

    def get_token(self) -> Optional[str]:
        for name in self.names:
            value = os.getenv(name)
            if value:
                return value
        return None


class ChainedTokenProvider:
    """First provider yielding a non-empty token wins."""

    def __init__(self, *providers: TokenProvider):
        self._providers = providers

    def get_token(self) -> Optional[str]:
        for provider in self._providers:
            token = provider.get_token()
            if token:
                return token
        return None
