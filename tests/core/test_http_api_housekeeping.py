from __future__ import annotations

import inspect
import uuid
from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest
from django.db import OperationalError

from core.housekeeping.catalog import CatalogReferenceCache
from core.housekeeping.errors import NotFound, StorageError, WindowClosed
from core.housekeeping.models import TaskCatalogEntry, TaskInstance
from core.http_api import (
    AgendaReadRequest,
    HttpApiDependencies,
    MarkInstanceHttpRequest,
    SeedDayHttpRequest,
    list_today_agenda,
    post_mark_instance,
    post_seed_day,
)
from core.http_api.errors import map_housekeeping_error, success_response
from core.time.clock import FixedClock

pytestmark = pytest.mark.django_db(transaction=True)


WORK_DATE = date(2026, 3, 10)
INSIDE = datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc)


def _deps(now: datetime = INSIDE) -> HttpApiDependencies:
    return HttpApiDependencies(
        clock=FixedClock(now),
        catalog=CatalogReferenceCache(max_size=16, ttl_seconds=60),
    )


def _planned_instance() -> TaskInstance:
    entry = TaskCatalogEntry.objects.create(name="Empty Bins", area="Back of House")
    return TaskInstance.objects.create(
        task=entry,
        work_date=WORK_DATE,
        planned_start=datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc),
        planned_end=datetime(2026, 3, 10, 10, 0, tzinfo=timezone.utc),
    )


def test_agenda_envelope_lists_rows_for_date() -> None:
    instance = _planned_instance()

    payload = list_today_agenda(AgendaReadRequest(work_date=WORK_DATE), _deps())

    assert payload["ok"] is True
    assert payload["data"]["date"] == "2026-03-10"
    (row,) = payload["data"]["rows"]
    assert row["id"] == str(instance.id)
    assert row["is_markable_now"] is True
    assert row["task"] == {"name": "Empty Bins", "area": "Back of House"}


def test_agenda_defaults_to_clock_date() -> None:
    payload = list_today_agenda(AgendaReadRequest(), _deps())

    assert payload["data"] == {"date": "2026-03-10", "rows": []}


class _MidnightClock:
    """Returns each instant once, then keeps returning the last one."""

    def __init__(self, *instants: datetime) -> None:
        self._instants = list(instants)

    def now_utc(self) -> datetime:
        if len(self._instants) > 1:
            return self._instants.pop(0)
        return self._instants[0]


def test_agenda_date_matches_rows_across_midnight() -> None:
    instance = _planned_instance()
    clock = _MidnightClock(
        datetime(2026, 3, 10, 23, 59, 59, tzinfo=timezone.utc),
        datetime(2026, 3, 11, 0, 0, 1, tzinfo=timezone.utc),
    )
    deps = HttpApiDependencies(
        clock=clock,
        catalog=CatalogReferenceCache(max_size=16, ttl_seconds=60),
    )

    payload = list_today_agenda(AgendaReadRequest(), deps)

    assert payload["data"]["date"] == "2026-03-10"
    assert [row["id"] for row in payload["data"]["rows"]] == [str(instance.id)]


def test_agenda_storage_failure_maps_to_storage_error() -> None:
    with patch(
        "core.http_api.handlers.list_today",
        side_effect=StorageError("list_today", "database is locked", error_type="OperationalError"),
    ):
        payload = list_today_agenda(AgendaReadRequest(work_date=WORK_DATE), _deps())

    assert payload["ok"] is False
    assert payload["error"]["code"] == "STORAGE_ERROR"
    assert payload["error"]["details"]["operation"] == "list_today"


def test_mark_success_envelope() -> None:
    instance = _planned_instance()

    payload = post_mark_instance(
        MarkInstanceHttpRequest(instance_id=str(instance.id), completed=True, remarks="done"),
        _deps(),
    )

    assert payload["ok"] is True
    assert payload["data"]["success"] is True
    completion = payload["data"]["completion"]
    assert completion["completion_status"] == "on_time"
    assert completion["instance_status"] == "completed"
    assert completion["remarks"] == "done"


def test_mark_unknown_instance_is_not_found() -> None:
    missing = str(uuid.uuid4())

    payload = post_mark_instance(
        MarkInstanceHttpRequest(instance_id=missing, completed=True),
        _deps(),
    )

    assert payload["ok"] is False
    assert payload["error"]["code"] == "INSTANCE_NOT_FOUND"
    assert payload["error"]["details"] == {"instance_id": missing}


def test_mark_after_window_is_window_closed() -> None:
    instance = _planned_instance()

    payload = post_mark_instance(
        MarkInstanceHttpRequest(instance_id=str(instance.id), completed=False),
        _deps(datetime(2026, 3, 10, 10, 5, tzinfo=timezone.utc)),
    )

    assert payload["ok"] is False
    assert payload["error"]["code"] == "WINDOW_CLOSED"
    assert payload["error"]["details"]["status"] == "planned"
    assert payload["error"]["details"]["reason"] == "window closed; task is overdue"


def test_mark_storage_failure_is_storage_error() -> None:
    instance = _planned_instance()

    with patch.object(TaskInstance, "save", side_effect=OperationalError("disk full")):
        payload = post_mark_instance(
            MarkInstanceHttpRequest(instance_id=str(instance.id), completed=True),
            _deps(),
        )

    assert payload["error"]["code"] == "STORAGE_ERROR"
    assert payload["error"]["details"]["error_type"] == "OperationalError"


def test_seed_envelope_reports_created_rows() -> None:
    payload = post_seed_day(SeedDayHttpRequest(work_date=WORK_DATE), _deps())

    assert payload["ok"] is True
    assert payload["data"]["success"] is True
    assert len(payload["data"]["created"]) == 4


def test_seed_unexpected_failure_is_handler_error() -> None:
    with patch("core.http_api.handlers.seed_day", side_effect=RuntimeError("boom")):
        payload = post_seed_day(SeedDayHttpRequest(), _deps())

    assert payload["ok"] is False
    assert payload["error"]["code"] == "HANDLER_EXECUTION_FAILED"
    assert payload["error"]["details"]["error_type"] == "RuntimeError"


@pytest.mark.parametrize(
    "handler",
    [list_today_agenda, post_mark_instance, post_seed_day],
)
def test_handlers_take_only_request_and_dependencies(handler) -> None:
    assert list(inspect.signature(handler).parameters) == ["request", "dependencies"]


def test_contracts_reject_bad_input() -> None:
    with pytest.raises(ValueError):
        MarkInstanceHttpRequest(instance_id="", completed=True)
    with pytest.raises(ValueError):
        MarkInstanceHttpRequest(instance_id="abc", completed="yes")
    with pytest.raises(ValueError):
        MarkInstanceHttpRequest(instance_id="abc", completed=True, remarks=5)
    with pytest.raises(ValueError):
        AgendaReadRequest(work_date=INSIDE)


def test_error_mapping_keeps_distinct_codes() -> None:
    codes = {
        map_housekeeping_error(NotFound("x")).code,
        map_housekeeping_error(
            WindowClosed("x", status="completed", reason="task is already completed")
        ).code,
        map_housekeeping_error(StorageError("op", "detail")).code,
    }

    assert codes == {"INSTANCE_NOT_FOUND", "WINDOW_CLOSED", "STORAGE_ERROR"}


def test_success_response_includes_meta_only_when_set() -> None:
    assert success_response({"a": 1}) == {"ok": True, "data": {"a": 1}}
    assert success_response({"a": 1}, meta={"page": 1})["meta"] == {"page": 1}
