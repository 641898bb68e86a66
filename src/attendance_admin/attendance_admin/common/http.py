"""JSON response helpers shared by the feature controllers."""

from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request

from ..core.exceptions import ApiError, AuthorizationError, NoVariantSucceeded, ValidationError

logger = logging.getLogger(__name__)

ROLE_HEADER = "X-Role"


def current_role() -> str:
    return (request.headers.get(ROLE_HEADER) or "").strip().lower()


def ok(data=None, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(message: str, status: int, **extra):
    return jsonify({"success": False, "message": message, **extra}), status


def json_errors(view):
    """Map domain errors raised by an async view onto JSON error responses."""

    @wraps(view)
    async def wrapper(*args, **kwargs):
        try:
            return await view(*args, **kwargs)
        except ValidationError as e:
            return fail(str(e), 400)
        except AuthorizationError as e:
            return fail(str(e), 403)
        except NoVariantSucceeded as e:
            return fail(e.message, 404, tried=list(e.tried))
        except ApiError as e:
            logger.warning("upstream error on %s: %s (%s)", e.path, e.message, e.status)
            status = e.status if e.status and 400 <= e.status < 600 else 502
            return fail(e.message, status)

    return wrapper
