"""
Ops Housekeeping — Development Seed
=====================================
Materializes a demo catalog and one planned instance per catalog entry
for a work date, so the agenda and marking flow can be exercised
without the external scheduler.

Idempotent: catalog entries are matched by name, and an instance that
already exists for a task/date is left untouched (instances are never
deleted here). Each task is seeded in its own transaction; a storage
failure on one task is reported and the rest continue.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from django.db import DatabaseError, transaction

from core.housekeeping.models import TaskCatalogEntry, TaskInstance, TaskInstanceStatus
from core.time.clock import Clock, get_default_clock, today_utc
from core.time.temporal import window_ending_at

logger = logging.getLogger("ops.housekeeping")

MIN_WINDOW_MINUTES = 30


@dataclass(frozen=True)
class SeedTask:
    code: str
    name: str
    area: str
    deadline_hour: int
    window_minutes: int


SEED_TASKS: tuple[SeedTask, ...] = (
    SeedTask("HK-1100", "Morning Service Reset", "Dining", 11, 60),
    SeedTask("HK-1500", "Afternoon Beverage Prep", "Pantry", 15, 60),
    SeedTask("HK-1900", "Evening Table Turnaround", "Dining", 19, 90),
    SeedTask("HK-2300", "Closing Equipment Shutdown", "Kitchen", 23, 90),
)


def _ensure_catalog_entry(task: SeedTask) -> TaskCatalogEntry:
    entry = TaskCatalogEntry.objects.filter(name=task.name).order_by("id").first()
    if entry is not None:
        return entry
    return TaskCatalogEntry.objects.create(
        name=task.name,
        area=task.area,
        description=f"{task.name} (auto-seeded {task.code})",
        is_active=True,
    )


def _seed_one(task: SeedTask, work_date: date) -> tuple[TaskInstance, bool]:
    window = window_ending_at(
        work_date,
        end_hour=task.deadline_hour,
        length_minutes=max(task.window_minutes, MIN_WINDOW_MINUTES),
    )
    with transaction.atomic():
        entry = _ensure_catalog_entry(task)
        existing = (
            TaskInstance.objects.filter(task_id=entry.id, work_date=work_date)
            .order_by("planned_start", "id")
            .first()
        )
        if existing is not None:
            return existing, False
        created = TaskInstance.objects.create(
            task=entry,
            work_date=work_date,
            planned_start=window.start,
            planned_end=window.end,
            status=TaskInstanceStatus.PLANNED,
        )
        return created, True


def _serialize_seeded(task: SeedTask, instance: TaskInstance) -> dict[str, Any]:
    return {
        "code": task.code,
        "instance_id": str(instance.id),
        "task_id": str(instance.task_id),
        "work_date": instance.work_date.isoformat(),
        "planned_start": instance.planned_start.isoformat(),
        "planned_end": instance.planned_end.isoformat(),
    }


def seed_day(
    work_date: Optional[date] = None,
    *,
    clock: Optional[Clock] = None,
    tasks: tuple[SeedTask, ...] = SEED_TASKS,
) -> dict[str, Any]:
    resolved_date = (
        work_date
        if work_date is not None
        else today_utc(clock if clock is not None else get_default_clock())
    )
    created: list[dict[str, Any]] = []
    existing: list[dict[str, Any]] = []
    errors: list[str] = []

    for task in tasks:
        try:
            instance, was_created = _seed_one(task, resolved_date)
        except DatabaseError as exc:
            logger.warning("Seeding %s failed: %s", task.code, exc)
            errors.append(f"Failed to seed {task.code}: {exc}")
            continue
        target = created if was_created else existing
        target.append(_serialize_seeded(task, instance))

    logger.info(
        "Seeded housekeeping day date=%s created=%s existing=%s errors=%s",
        resolved_date,
        len(created),
        len(existing),
        len(errors),
    )
    return {
        "success": not errors,
        "work_date": resolved_date.isoformat(),
        "created": created,
        "existing": existing,
        "errors": errors,
    }
