"""
Ops Housekeeping - Relational Task State
========================================
DB-backed catalog, scheduled instances and completion outcomes.

Ownership:
- TaskCatalogEntry rows are reference data maintained elsewhere.
- TaskInstance rows are materialized by an external scheduler with
  status=planned; only the completion recorder changes `status`.
- TaskCompletion rows are written only by the completion recorder,
  at most one per instance.
"""

from __future__ import annotations

import uuid

from django.db import models


class TaskInstanceStatus(models.TextChoices):
    PLANNED = "planned", "Planned"
    COMPLETED = "completed", "Completed"
    SKIPPED = "skipped", "Skipped"


class CompletionStatus(models.TextChoices):
    ON_TIME = "on_time", "On time"
    SKIPPED = "skipped", "Skipped"


RESOLVED_INSTANCE_STATUSES = frozenset(
    {TaskInstanceStatus.COMPLETED, TaskInstanceStatus.SKIPPED}
)


class TaskCatalogEntry(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    area = models.CharField(max_length=120)
    description = models.TextField(default="", blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "ops_hk_task_catalog"
        ordering = ["name", "id"]

    def __str__(self) -> str:
        return f"{self.name} ({self.area})"


class TaskInstance(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    task = models.ForeignKey(
        TaskCatalogEntry,
        on_delete=models.DO_NOTHING,
        related_name="instances",
        db_column="task_id",
        db_constraint=False,
    )
    work_date = models.DateField()
    planned_start = models.DateTimeField()
    planned_end = models.DateTimeField()
    status = models.CharField(
        max_length=20,
        choices=TaskInstanceStatus.choices,
        default=TaskInstanceStatus.PLANNED,
    )

    class Meta:
        db_table = "ops_hk_task_instances"
        ordering = ["work_date", "planned_start", "id"]
        indexes = [
            models.Index(
                fields=["work_date", "planned_start", "id"],
                name="idx_hk_inst_date_start",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(planned_start__lte=models.F("planned_end")),
                name="ck_hk_inst_window_ordered",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.id}:{self.work_date}:{self.status}"


class TaskCompletion(models.Model):
    id = models.BigAutoField(primary_key=True)
    # OneToOne carries the UNIQUE index on instance_id that upserts key on.
    instance = models.OneToOneField(
        TaskInstance,
        on_delete=models.CASCADE,
        related_name="completion",
        db_column="instance_id",
    )
    completed = models.BooleanField()
    completion_status = models.CharField(
        max_length=20,
        choices=CompletionStatus.choices,
    )
    completed_at = models.DateTimeField()
    remarks = models.TextField(null=True, blank=True)
    supervisor = models.CharField(max_length=255, default="manager")

    class Meta:
        db_table = "ops_hk_task_completions"
        ordering = ["instance_id"]

    def __str__(self) -> str:
        return f"{self.instance_id}:{self.completion_status}"
