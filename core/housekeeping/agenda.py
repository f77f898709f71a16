"""
Ops Housekeeping — Agenda Reader
==================================
Time-ordered, catalog-enriched view of the instances planned for a date.

- ordered by planned_start, then id (deterministic for equal starts)
- is_markable_now is recomputed from one `now` per listing, never read
  from a stored flag
- catalog name/area is attached from a bulk lookup merged in-process;
  a missing row gives task=None, and a failing catalog lookup degrades
  every row to task=None instead of failing the listing
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, Protocol

from django.db import DatabaseError

from core.housekeeping.catalog import CatalogRef, fetch_catalog_refs
from core.housekeeping.errors import StorageError
from core.housekeeping.markability import is_markable
from core.housekeeping.models import TaskInstance
from core.time.clock import Clock, get_default_clock, today_utc

logger = logging.getLogger("ops.housekeeping")


class CatalogLookup(Protocol):
    def lookup(self, task_ids, *, now: datetime) -> dict[uuid.UUID, CatalogRef]:
        ...


class _DirectCatalogLookup:
    def lookup(self, task_ids, *, now: datetime) -> dict[uuid.UUID, CatalogRef]:
        return fetch_catalog_refs(task_ids)


@dataclass(frozen=True)
class EnrichedInstance:
    id: uuid.UUID
    task_id: uuid.UUID
    work_date: date
    planned_start: datetime
    planned_end: datetime
    status: str
    is_markable_now: bool
    task: Optional[CatalogRef]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "task_id": str(self.task_id),
            "work_date": self.work_date.isoformat(),
            "planned_start": self.planned_start.isoformat(),
            "planned_end": self.planned_end.isoformat(),
            "status": self.status,
            "is_markable_now": self.is_markable_now,
            "task": None if self.task is None else self.task.to_dict(),
        }


def _resolve_work_date(work_date: Optional[date], clock: Clock) -> date:
    if work_date is None:
        return today_utc(clock)
    if isinstance(work_date, datetime) or not isinstance(work_date, date):
        raise ValueError("work_date must be a date.")
    return work_date


def _lookup_catalog(
    catalog: CatalogLookup,
    task_ids: list[uuid.UUID],
    *,
    now: datetime,
    work_date: date,
) -> dict[uuid.UUID, CatalogRef]:
    if not task_ids:
        return {}
    try:
        return catalog.lookup(task_ids, now=now)
    except DatabaseError as exc:
        logger.warning(
            "Catalog lookup failed for agenda date=%s; rows listed without task: %s",
            work_date,
            exc,
        )
        return {}


def list_today(
    work_date: Optional[date] = None,
    *,
    clock: Optional[Clock] = None,
    catalog: Optional[CatalogLookup] = None,
) -> tuple[EnrichedInstance, ...]:
    source = clock if clock is not None else get_default_clock()
    resolved_date = _resolve_work_date(work_date, source)

    try:
        instances = list(
            TaskInstance.objects.filter(work_date=resolved_date).order_by(
                "planned_start",
                "id",
            )
        )
    except DatabaseError as exc:
        logger.error("Agenda read failed date=%s: %s", resolved_date, exc, exc_info=True)
        raise StorageError.wrap("list_today", exc) from exc

    now = source.now_utc()
    refs = _lookup_catalog(
        catalog if catalog is not None else _DirectCatalogLookup(),
        [instance.task_id for instance in instances],
        now=now,
        work_date=resolved_date,
    )

    return tuple(
        EnrichedInstance(
            id=instance.id,
            task_id=instance.task_id,
            work_date=instance.work_date,
            planned_start=instance.planned_start,
            planned_end=instance.planned_end,
            status=str(instance.status),
            is_markable_now=is_markable(instance, now),
            task=refs.get(instance.task_id),
        )
        for instance in instances
    )
