from __future__ import annotations

from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest
from django.db import OperationalError

from core.housekeeping import seed as seed_module
from core.housekeeping.models import TaskCatalogEntry, TaskInstance, TaskInstanceStatus
from core.housekeeping.seed import MIN_WINDOW_MINUTES, SEED_TASKS, SeedTask, seed_day
from core.time.clock import FixedClock

pytestmark = pytest.mark.django_db(transaction=True)


WORK_DATE = date(2026, 3, 10)


def _utc(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 10, hour, minute, tzinfo=timezone.utc)


def test_seed_creates_one_planned_instance_per_task() -> None:
    report = seed_day(WORK_DATE)

    assert report["success"] is True
    assert report["work_date"] == "2026-03-10"
    assert len(report["created"]) == len(SEED_TASKS)
    assert report["existing"] == []
    assert report["errors"] == []
    assert TaskCatalogEntry.objects.count() == len(SEED_TASKS)
    assert set(
        TaskInstance.objects.filter(work_date=WORK_DATE).values_list("status", flat=True)
    ) == {TaskInstanceStatus.PLANNED}


def test_seed_windows_end_at_each_deadline() -> None:
    seed_day(WORK_DATE)

    windows = {
        instance.task.name: (instance.planned_start, instance.planned_end)
        for instance in TaskInstance.objects.select_related("task")
    }

    assert windows["Morning Service Reset"] == (_utc(10), _utc(11))
    assert windows["Afternoon Beverage Prep"] == (_utc(14), _utc(15))
    assert windows["Evening Table Turnaround"] == (_utc(17, 30), _utc(19))
    assert windows["Closing Equipment Shutdown"] == (_utc(21, 30), _utc(23))


def test_short_windows_are_widened_to_minimum() -> None:
    task = SeedTask("HK-0800", "Quick Check", "Lobby", 8, 5)

    seed_day(WORK_DATE, tasks=(task,))

    instance = TaskInstance.objects.get()
    assert (instance.planned_end - instance.planned_start).total_seconds() == (
        MIN_WINDOW_MINUTES * 60
    )


def test_reseeding_keeps_existing_instances() -> None:
    first = seed_day(WORK_DATE)
    second = seed_day(WORK_DATE)

    assert second["created"] == []
    assert [row["instance_id"] for row in second["existing"]] == [
        row["instance_id"] for row in first["created"]
    ]
    assert TaskInstance.objects.count() == len(SEED_TASKS)
    assert TaskCatalogEntry.objects.count() == len(SEED_TASKS)


def test_seeding_another_day_reuses_catalog() -> None:
    seed_day(WORK_DATE)
    seed_day(date(2026, 3, 11))

    assert TaskCatalogEntry.objects.count() == len(SEED_TASKS)
    assert TaskInstance.objects.count() == 2 * len(SEED_TASKS)


def test_default_date_comes_from_the_clock() -> None:
    report = seed_day(clock=FixedClock(_utc(6)))

    assert report["work_date"] == "2026-03-10"


def test_failure_on_one_task_is_reported_and_others_continue() -> None:
    real_seed_one = seed_module._seed_one

    def flaky(task, work_date):
        if task.code == "HK-1500":
            raise OperationalError("database is locked")
        return real_seed_one(task, work_date)

    with patch.object(seed_module, "_seed_one", side_effect=flaky):
        report = seed_day(WORK_DATE)

    assert report["success"] is False
    assert report["errors"] == ["Failed to seed HK-1500: database is locked"]
    assert len(report["created"]) == len(SEED_TASKS) - 1
