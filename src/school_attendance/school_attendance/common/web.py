"""Shared bits of the JSON controller layer.

Every controller answers ``{"success": false, "message": ...}`` on failure so
the client can show the message as a dismissable toast.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Any

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    OutOfZoneError,
    ValidationError,
)
from .datetime_utils import format_date, format_timestamp

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ConflictError, 409),
    (OutOfZoneError, 403),
    (AuthorizationError, 403),
    (AuthenticationError, 401),
    (ValidationError, 400),
)


def to_json(value: Any) -> Any:
    """Turn domain dataclasses (and lists of them) into JSON-ready values."""

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, date):
        return format_date(value)
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


def ok(data: Any = None, **extra):
    payload = {"success": True}
    if data is not None:
        payload["data"] = to_json(data)
    payload.update({k: to_json(v) for k, v in extra.items()})
    return jsonify(payload)


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def status_for(err: DomainError) -> int:
    for cls, status in _STATUS_BY_ERROR:
        if isinstance(err, cls):
            return status
    return 400


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def current_user_id() -> int:
    return int(session["user_id"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Silakan login terlebih dahulu", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Silakan login terlebih dahulu", 401)
        if session.get("role") != Role.ADMIN.value:
            return fail("Anda tidak memiliki akses", 403)
        return view(*args, **kwargs)

    return wrapper


def handles_domain_errors(action: str):
    """Map domain exceptions to JSON errors; log anything unexpected.

    ``action`` names the operation in the generic 500 message.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                return fail(str(e), status_for(e))
            except Exception:
                logger.exception("Unexpected error while %s", action)
                return fail(f"Kesalahan sistem saat {action}", 500)

        return wrapper

    return decorator
