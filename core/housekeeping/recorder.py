"""
Ops Housekeeping — Completion Recorder
========================================
Marks a task instance as done (on_time) or skipped.

Checks, in order:
1. instance exists               → else NotFound
2. instance markable at `now`    → else WindowClosed

On success, inside ONE transaction:
- insert-or-replace the TaskCompletion keyed by instance_id
- set TaskInstance.status to completed / skipped
Either both writes persist or neither does.

Concurrency: there is no row lock or version token. The transaction
takes the database write lock when it begins (SQLite IMMEDIATE mode),
so two simultaneous marks of the same instance run one after the
other: the first succeeds, the second re-reads a resolved status and
gets WindowClosed. On a backend that lets both pass the check, the
unique index on instance_id keeps one row and the last commit wins.

No retries. Database failures surface as StorageError.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from django.db import DatabaseError, transaction

from core.housekeeping.conf import default_supervisor
from core.housekeeping.errors import NotFound, StorageError, WindowClosed
from core.housekeeping.markability import non_markable_reason
from core.housekeeping.models import (
    CompletionStatus,
    TaskCompletion,
    TaskInstance,
    TaskInstanceStatus,
)
from core.time.clock import Clock, get_default_clock

logger = logging.getLogger("ops.housekeeping")


@dataclass(frozen=True)
class CompletionResult:
    instance_id: uuid.UUID
    completed: bool
    completion_status: str
    completed_at: datetime
    remarks: Optional[str]
    supervisor: str
    instance_status: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "instance_id": str(self.instance_id),
            "completed": self.completed,
            "completion_status": self.completion_status,
            "completed_at": self.completed_at.isoformat(),
            "remarks": self.remarks,
            "supervisor": self.supervisor,
            "instance_status": self.instance_status,
        }


def _canonical_instance_id(value: Any) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (TypeError, ValueError):
        return None


def _clean_remarks(value: Any) -> Optional[str]:
    # Blank remarks are stored as NULL; other text is kept verbatim.
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _clean_supervisor(value: Any) -> str:
    if value is None:
        return default_supervisor()
    cleaned = str(value).strip()
    return cleaned or default_supervisor()


def outcome_for(completed: bool) -> tuple[str, str]:
    """(completion_status, instance_status) for a marking outcome."""
    if completed:
        return CompletionStatus.ON_TIME, TaskInstanceStatus.COMPLETED
    return CompletionStatus.SKIPPED, TaskInstanceStatus.SKIPPED


def _write_outcome(
    instance: TaskInstance,
    *,
    completed: bool,
    now: datetime,
    remarks: Optional[str],
    supervisor: str,
) -> TaskCompletion:
    completion_status, instance_status = outcome_for(completed)
    completion, _ = TaskCompletion.objects.update_or_create(
        instance=instance,
        defaults={
            "completed": completed,
            "completion_status": completion_status,
            "completed_at": now,
            "remarks": remarks,
            "supervisor": supervisor,
        },
    )
    instance.status = instance_status
    instance.save(update_fields=["status"])
    return completion


def record_completion(
    instance_id: Any,
    completed: bool,
    remarks: Optional[str] = None,
    supervisor: Optional[str] = None,
    *,
    clock: Optional[Clock] = None,
) -> CompletionResult:
    if not isinstance(completed, bool):
        raise ValueError("completed must be a boolean.")

    canonical_id = _canonical_instance_id(instance_id)
    if canonical_id is None:
        raise NotFound(instance_id)

    clean_remarks = _clean_remarks(remarks)
    clean_supervisor = _clean_supervisor(supervisor)
    source = clock if clock is not None else get_default_clock()

    try:
        with transaction.atomic():
            instance = TaskInstance.objects.filter(pk=canonical_id).first()
            if instance is None:
                raise NotFound(canonical_id)

            now = source.now_utc()
            reason = non_markable_reason(instance, now)
            if reason is not None:
                raise WindowClosed(canonical_id, status=instance.status, reason=reason)

            completion = _write_outcome(
                instance,
                completed=completed,
                now=now,
                remarks=clean_remarks,
                supervisor=clean_supervisor,
            )
    except WindowClosed as exc:
        logger.info(
            "Mark refused instance=%s status=%s reason=%s",
            exc.instance_id,
            exc.status,
            exc.reason,
        )
        raise
    except DatabaseError as exc:
        logger.error(
            "Mark failed instance=%s: %s",
            canonical_id,
            exc,
            exc_info=True,
        )
        raise StorageError.wrap("record_completion", exc) from exc

    logger.info(
        "Marked instance=%s completion_status=%s status=%s supervisor=%s",
        canonical_id,
        completion.completion_status,
        instance.status,
        completion.supervisor,
    )
    return CompletionResult(
        instance_id=canonical_id,
        completed=completion.completed,
        completion_status=str(completion.completion_status),
        completed_at=completion.completed_at,
        remarks=completion.remarks,
        supervisor=completion.supervisor,
        instance_status=str(instance.status),
    )
