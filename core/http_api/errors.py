"""
Ops HTTP API - Error Mapping
============================
Stable transport error mapping for housekeeping failures.
"""

from __future__ import annotations

from typing import Any, Optional

from core.housekeeping.errors import (
    HousekeepingError,
    NotFound,
    StorageError,
    WindowClosed,
)
from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse

INVALID_REQUEST = "INVALID_REQUEST"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
HANDLER_EXECUTION_FAILED = "HANDLER_EXECUTION_FAILED"


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(
    data: Any,
    *,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data, meta=meta).to_dict()


def map_housekeeping_error(exc: HousekeepingError) -> HttpApiErrorBody:
    if isinstance(exc, NotFound):
        details = {"instance_id": str(exc.instance_id)}
    elif isinstance(exc, WindowClosed):
        details = {
            "instance_id": str(exc.instance_id),
            "status": exc.status,
            "reason": exc.reason,
        }
    elif isinstance(exc, StorageError):
        details = {
            "operation": exc.operation,
            "error_type": exc.error_type,
            "detail": exc.detail,
        }
    else:
        details = {}
    return HttpApiErrorBody(code=exc.code, message=str(exc), details=details)


def housekeeping_error_response(exc: HousekeepingError) -> dict[str, Any]:
    mapped = map_housekeeping_error(exc)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details=mapped.details,
    )
