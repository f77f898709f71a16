from __future__ import annotations

import json
import uuid
from datetime import date, datetime, timezone

import pytest

from adapters.django_api.wiring import reset_dependencies
from core.housekeeping.models import TaskCatalogEntry, TaskCompletion, TaskInstance
from core.time.clock import FixedClock, get_default_clock, set_default_clock

pytestmark = pytest.mark.django_db(transaction=True)


WORK_DATE = date(2026, 3, 10)
TODAY_URL = "/v1/housekeeping/today"
MARK_URL = "/v1/housekeeping/mark"
SEED_URL = "/v1/housekeeping/seed"


@pytest.fixture
def fixed_clock():
    original = get_default_clock()
    clock = FixedClock(datetime(2026, 3, 10, 9, 30, tzinfo=timezone.utc))
    set_default_clock(clock)
    reset_dependencies()
    yield clock
    set_default_clock(original)
    reset_dependencies()


def _planned_instance() -> TaskInstance:
    entry = TaskCatalogEntry.objects.create(name="Refill Soap", area="Restrooms")
    return TaskInstance.objects.create(
        task=entry,
        work_date=WORK_DATE,
        planned_start=datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc),
        planned_end=datetime(2026, 3, 10, 10, 0, tzinfo=timezone.utc),
    )


def _mark(client, body, method: str = "patch"):
    send = getattr(client, method)
    return send(MARK_URL, data=json.dumps(body), content_type="application/json")


def test_today_lists_rows_for_clock_date(client, fixed_clock) -> None:
    instance = _planned_instance()

    response = client.get(TODAY_URL)

    assert response.status_code == 200
    payload = response.json()
    assert payload["data"]["date"] == "2026-03-10"
    assert [row["id"] for row in payload["data"]["rows"]] == [str(instance.id)]


def test_today_accepts_explicit_date(client, fixed_clock) -> None:
    _planned_instance()

    response = client.get(TODAY_URL, {"date": "2026-03-11"})

    assert response.status_code == 200
    assert response.json()["data"] == {"date": "2026-03-11", "rows": []}


def test_today_rejects_invalid_date(client, fixed_clock) -> None:
    response = client.get(TODAY_URL, {"date": "10/03/2026"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"


def test_today_rejects_post(client, fixed_clock) -> None:
    response = client.post(TODAY_URL)

    assert response.status_code == 405
    assert response.json()["error"]["code"] == "METHOD_NOT_ALLOWED"


@pytest.mark.parametrize("method", ["patch", "post"])
def test_mark_inside_window_succeeds(client, fixed_clock, method: str) -> None:
    instance = _planned_instance()

    response = _mark(
        client,
        {"instance_id": str(instance.id), "completed": True, "remarks": "spotless"},
        method=method,
    )

    assert response.status_code == 200
    completion = response.json()["data"]["completion"]
    assert completion["completion_status"] == "on_time"
    assert completion["supervisor"] == "manager"
    assert TaskCompletion.objects.filter(instance_id=instance.id).count() == 1


def test_second_mark_is_window_closed(client, fixed_clock) -> None:
    instance = _planned_instance()
    _mark(client, {"instance_id": str(instance.id), "completed": True})

    response = _mark(client, {"instance_id": str(instance.id), "completed": False})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "WINDOW_CLOSED"
    assert TaskCompletion.objects.get(instance_id=instance.id).completed is True


def test_mark_after_window_is_window_closed(client, fixed_clock) -> None:
    instance = _planned_instance()
    fixed_clock.set(datetime(2026, 3, 10, 10, 5, tzinfo=timezone.utc))

    response = _mark(client, {"instance_id": str(instance.id), "completed": True})

    assert response.status_code == 400
    assert response.json()["error"]["details"]["reason"] == "window closed; task is overdue"
    assert TaskCompletion.objects.count() == 0


def test_mark_unknown_instance_is_404(client, fixed_clock) -> None:
    response = _mark(client, {"instance_id": str(uuid.uuid4()), "completed": True})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "INSTANCE_NOT_FOUND"


def test_mark_missing_instance_id_is_400(client, fixed_clock) -> None:
    response = _mark(client, {"completed": True})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_REQUEST"


def test_mark_string_completed_is_400(client, fixed_clock) -> None:
    instance = _planned_instance()

    response = _mark(client, {"instance_id": str(instance.id), "completed": "true"})

    assert response.status_code == 400
    assert TaskCompletion.objects.count() == 0


def test_mark_missing_completed_records_skip(client, fixed_clock) -> None:
    instance = _planned_instance()

    response = _mark(client, {"instance_id": str(instance.id)})

    assert response.status_code == 200
    assert response.json()["data"]["completion"]["completion_status"] == "skipped"


def test_mark_rejects_malformed_json(client, fixed_clock) -> None:
    response = client.patch(MARK_URL, data="{not json", content_type="application/json")

    assert response.status_code == 400


def test_mark_rejects_get(client, fixed_clock) -> None:
    assert client.get(MARK_URL).status_code == 405


def test_seed_then_list(client, fixed_clock) -> None:
    seeded = client.post(f"{SEED_URL}?date=2026-03-10")
    listed = client.get(TODAY_URL)

    assert seeded.status_code == 200
    assert len(seeded.json()["data"]["created"]) == 4
    rows = listed.json()["data"]["rows"]
    assert [row["task"]["name"] for row in rows] == [
        "Morning Service Reset",
        "Afternoon Beverage Prep",
        "Evening Table Turnaround",
        "Closing Equipment Shutdown",
    ]


def test_seed_partial_failure_is_207(client, fixed_clock, monkeypatch) -> None:
    from core.housekeeping import seed as seed_module
    from django.db import OperationalError

    real_seed_one = seed_module._seed_one

    def flaky(task, work_date):
        if task.code == "HK-2300":
            raise OperationalError("database is locked")
        return real_seed_one(task, work_date)

    monkeypatch.setattr(seed_module, "_seed_one", flaky)

    response = client.post(SEED_URL)

    assert response.status_code == 207
    assert response.json()["data"]["errors"] == ["Failed to seed HK-2300: database is locked"]
