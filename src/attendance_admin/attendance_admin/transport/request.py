from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from urllib.parse import urlencode


def clean_params(params: Optional[Mapping[str, Any]]) -> dict[str, str]:
    """Drop ``None``/empty-string values; everything else is stringified."""
    out: dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        out[key] = str(value)
    return out


@dataclass(frozen=True)
class RequestSpec:
    """One candidate request: method, path, query and optional JSON body."""

    method: str
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)
    json: Any = None

    def __post_init__(self):
        if not self.path.startswith("/"):
            object.__setattr__(self, "path", f"/{self.path}")

    def query(self) -> dict[str, str]:
        return clean_params(self.params)

    def url(self) -> str:
        q = self.query()
        return f"{self.path}?{urlencode(q)}" if q else self.path

    def with_api_prefix(self) -> "RequestSpec":
        return RequestSpec(method=self.method, path=f"/api{self.path}", params=self.params, json=self.json)
