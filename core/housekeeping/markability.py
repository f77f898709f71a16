"""
Ops Housekeeping — Markability Evaluator
==========================================
Pure decision: may this task instance be marked at `now`?

Rule:
    status == planned  AND  planned_start <= now <= planned_end

The window is CLOSED on both ends: marking exactly at the opening
or closing instant is allowed. Once status leaves `planned`, or `now`
passes planned_end, the instance is non-markable for good. Nothing
here transitions an elapsed instance; it simply stays planned.

No caching, no side effects, no clock access. Callers pass `now`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from core.housekeeping.models import TaskInstanceStatus
from core.time.temporal import TimeWindow


class MarkableInstance(Protocol):
    status: str
    planned_start: datetime
    planned_end: datetime


def _window_of(instance: MarkableInstance) -> Optional[TimeWindow]:
    try:
        return TimeWindow(start=instance.planned_start, end=instance.planned_end)
    except ValueError:
        # Inverted window: nothing can fall inside it.
        return None


def _require_aware(now: datetime) -> datetime:
    if now.tzinfo is None:
        raise ValueError("now must be a timezone-aware datetime.")
    return now


def is_markable(instance: MarkableInstance, now: datetime) -> bool:
    _require_aware(now)
    if instance.status != TaskInstanceStatus.PLANNED:
        return False
    window = _window_of(instance)
    if window is None:
        return False
    return window.contains(now)


def non_markable_reason(instance: MarkableInstance, now: datetime) -> Optional[str]:
    """
    Human-readable reason the instance cannot be marked, or None when
    it can. Always agrees with is_markable().
    """
    _require_aware(now)
    if instance.status != TaskInstanceStatus.PLANNED:
        return f"task is already {instance.status}"
    window = _window_of(instance)
    if window is None:
        return "task window is invalid"
    if window.has_closed(now):
        return "window closed; task is overdue"
    if not window.contains(now):
        return "window has not opened yet"
    return None
