from __future__ import annotations

from typing import Any, Optional, Sequence

from .constants import SOFT_FAILURE_STATUSES


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a role lacks permission for an action."""


class ApiError(DomainError):
    """Raised when the backend answers with a non-2xx status or cannot be reached.

    ``status`` is ``None`` for network-level failures.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        data: Any = None,
        path: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data
        self.path = path

    @property
    def is_soft(self) -> bool:
        return self.status in SOFT_FAILURE_STATUSES


class NoVariantSucceeded(ApiError):
    """Raised when every endpoint candidate failed softly."""

    def __init__(self, last: Optional[ApiError], *, tried: Sequence[str] = ()):
        detail = last.message if last else "no candidates"
        super().__init__(
            f"No endpoint variant succeeded: {detail}",
            status=last.status if last else None,
            data=last.data if last else None,
            path=last.path if last else None,
        )
        self.last = last
        self.tried = tuple(tried)
