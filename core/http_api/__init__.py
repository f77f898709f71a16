"""
Ops HTTP API - Public API
=========================
"""

from core.http_api.contracts import (
    AgendaReadRequest,
    HttpApiErrorBody,
    HttpApiResponse,
    MarkInstanceHttpRequest,
    SeedDayHttpRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    error_response,
    housekeeping_error_response,
    map_housekeeping_error,
    success_response,
)
from core.http_api.handlers import (
    list_today_agenda,
    post_mark_instance,
    post_seed_day,
)

__all__ = [
    "AgendaReadRequest",
    "MarkInstanceHttpRequest",
    "SeedDayHttpRequest",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "HttpApiDependencies",
    "error_response",
    "success_response",
    "map_housekeeping_error",
    "housekeeping_error_response",
    "list_today_agenda",
    "post_mark_instance",
    "post_seed_day",
]
