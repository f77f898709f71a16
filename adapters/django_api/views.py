"""
Ops Django Adapter Views
========================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.http_api.contracts import (
    AgendaReadRequest,
    MarkInstanceHttpRequest,
    SeedDayHttpRequest,
)
from core.http_api.errors import INVALID_REQUEST, METHOD_NOT_ALLOWED, error_response
from core.http_api.handlers import list_today_agenda, post_mark_instance, post_seed_day

_STATUS_BY_ERROR_CODE = {
    INVALID_REQUEST: 400,
    METHOD_NOT_ALLOWED: 405,
    "INSTANCE_NOT_FOUND": 404,
    "WINDOW_CLOSED": 400,
    "STORAGE_ERROR": 500,
    "HANDLER_EXECUTION_FAILED": 500,
}

_MARK_METHODS = frozenset({"PATCH", "POST"})


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _envelope_response(payload: dict[str, Any]) -> JsonResponse:
    if payload.get("ok"):
        return JsonResponse(payload)
    status = _STATUS_BY_ERROR_CODE.get(payload["error"]["code"], 400)
    return JsonResponse(payload, status=status)


def _parse_optional_date(value: Any, field_name: str) -> date | None:
    if value is None or value == "":
        return None
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"{field_name} must be an ISO date (YYYY-MM-DD).") from exc


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except Exception as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _coerce_completed(value: Any) -> bool:
    # Missing and numeric values coerce by truthiness; strings are rejected.
    if isinstance(value, bool):
        return value
    if value is None or isinstance(value, (int, float)):
        return bool(value)
    raise ValueError("completed must be a boolean.")


def _optional_text(body: dict[str, Any], key: str) -> str | None:
    value = body.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string.")
    return value


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        METHOD_NOT_ALLOWED,
        "Method not allowed for this endpoint.",
        status=405,
    )


@csrf_exempt
def housekeeping_today_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    try:
        contract = AgendaReadRequest(
            work_date=_parse_optional_date(request.GET.get("date"), "date"),
        )
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)

    payload = list_today_agenda(contract, build_dependencies())
    return _envelope_response(payload)


@csrf_exempt
def housekeeping_mark_view(request: HttpRequest) -> JsonResponse:
    if request.method not in _MARK_METHODS:
        return _method_not_allowed()
    try:
        body = _parse_json_body(request)
        instance_id = body.get("instance_id")
        if instance_id is None:
            raise ValueError("instance_id is required.")
        contract = MarkInstanceHttpRequest(
            instance_id=str(instance_id),
            completed=_coerce_completed(body.get("completed")),
            remarks=_optional_text(body, "remarks"),
            supervisor=_optional_text(body, "supervisor"),
        )
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)

    payload = post_mark_instance(contract, build_dependencies())
    return _envelope_response(payload)


@csrf_exempt
def housekeeping_seed_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    try:
        contract = SeedDayHttpRequest(
            work_date=_parse_optional_date(request.GET.get("date"), "date"),
        )
    except ValueError as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)

    payload = post_seed_day(contract, build_dependencies())
    response = _envelope_response(payload)
    if payload.get("ok") and not payload["data"]["success"]:
        response.status_code = 207
    return response
