"""
Ops HTTP API - Framework-Agnostic Handlers
==========================================
Pure handler functions over contracts and injected dependencies.
Every handler returns the response envelope; none raises for
expected failures.
"""

from __future__ import annotations

import logging
from typing import Any

from core.housekeeping.agenda import list_today
from core.housekeeping.errors import HousekeepingError, StorageError, WindowClosed
from core.housekeeping.recorder import record_completion
from core.housekeeping.seed import seed_day
from core.http_api.contracts import (
    AgendaReadRequest,
    MarkInstanceHttpRequest,
    SeedDayHttpRequest,
)
from core.http_api.errors import (
    HANDLER_EXECUTION_FAILED,
    INVALID_REQUEST,
    error_response,
    housekeeping_error_response,
    success_response,
)
from core.time.clock import today_utc

logger = logging.getLogger("ops.http")


def _failure_response(exc: HousekeepingError, *, action: str) -> dict[str, Any]:
    if isinstance(exc, StorageError):
        logger.error("%s failed with storage error: %s", action, exc)
    elif not isinstance(exc, WindowClosed):
        logger.info("%s rejected: %s", action, exc)
    return housekeeping_error_response(exc)


def list_today_agenda(
    request: AgendaReadRequest,
    dependencies,
) -> dict[str, Any]:
    work_date = (
        request.work_date
        if request.work_date is not None
        else today_utc(dependencies.clock)
    )
    try:
        rows = list_today(
            work_date,
            clock=dependencies.clock,
            catalog=dependencies.catalog,
        )
    except HousekeepingError as exc:
        return _failure_response(exc, action="list_today")
    except ValueError as exc:
        return error_response(code=INVALID_REQUEST, message=str(exc), details={})

    return success_response(
        {
            "date": work_date.isoformat(),
            "rows": [row.to_dict() for row in rows],
        }
    )


def post_mark_instance(
    request: MarkInstanceHttpRequest,
    dependencies,
) -> dict[str, Any]:
    try:
        result = record_completion(
            request.instance_id,
            request.completed,
            remarks=request.remarks,
            supervisor=request.supervisor,
            clock=dependencies.clock,
        )
    except HousekeepingError as exc:
        return _failure_response(exc, action="mark")
    except ValueError as exc:
        return error_response(code=INVALID_REQUEST, message=str(exc), details={})

    return success_response({"success": True, "completion": result.to_dict()})


def post_seed_day(
    request: SeedDayHttpRequest,
    dependencies,
) -> dict[str, Any]:
    try:
        report = seed_day(request.work_date, clock=dependencies.clock)
    except Exception as exc:
        logger.error("Seeding housekeeping day failed: %s", exc, exc_info=True)
        return error_response(
            code=HANDLER_EXECUTION_FAILED,
            message="Failed to seed housekeeping tasks.",
            details={"error_type": type(exc).__name__, "detail": str(exc)},
        )
    return success_response(report)
