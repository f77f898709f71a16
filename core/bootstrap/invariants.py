"""
Ops Bootstrap — Invariant Checks
==================================
Each function verifies one system law.
If any check fails → SystemBootstrapError is raised.

These checks do NOT:
- Auto-fix anything
- Run migrations
- Create tables
"""

import logging

from django.db import connection

from core.bootstrap.errors import SystemBootstrapError

logger = logging.getLogger("ops.bootstrap")

HOUSEKEEPING_TABLES = (
    "ops_hk_task_catalog",
    "ops_hk_task_instances",
    "ops_hk_task_completions",
)


# ══════════════════════════════════════════════════════════════
# CHECK 1: Housekeeping Tables Exist
# ══════════════════════════════════════════════════════════════

def check_housekeeping_tables():
    """
    Verify the housekeeping tables exist.
    If any is missing → refuse start. No auto-migration.
    """
    table_names = set(connection.introspection.table_names())
    missing = [name for name in HOUSEKEEPING_TABLES if name not in table_names]

    if missing:
        raise SystemBootstrapError(
            invariant="HOUSEKEEPING_TABLES",
            detail=(
                f"Missing tables: {', '.join(missing)}. "
                "Run migrations before starting. "
                "Bootstrap will not auto-create tables."
            ),
        )

    logger.info("✓ Housekeeping tables exist.")


# ══════════════════════════════════════════════════════════════
# CHECK 2: Completion ⇔ Resolved Status
# ══════════════════════════════════════════════════════════════

def check_completion_status_consistency():
    """
    A completion row exists for an instance exactly when its status
    is completed or skipped. Reports up to five offending ids.
    """
    from core.housekeeping.models import (
        RESOLVED_INSTANCE_STATUSES,
        TaskInstance,
        TaskInstanceStatus,
    )

    planned_with_completion = list(
        TaskInstance.objects.filter(
            status=TaskInstanceStatus.PLANNED,
            completion__isnull=False,
        ).values_list("id", flat=True)[:5]
    )
    resolved_without_completion = list(
        TaskInstance.objects.filter(
            status__in=tuple(RESOLVED_INSTANCE_STATUSES),
            completion__isnull=True,
        ).values_list("id", flat=True)[:5]
    )

    if planned_with_completion or resolved_without_completion:
        raise SystemBootstrapError(
            invariant="COMPLETION_STATUS_CONSISTENCY",
            detail=(
                "planned instances with a completion: "
                f"{[str(i) for i in planned_with_completion]}; "
                "resolved instances without a completion: "
                f"{[str(i) for i in resolved_without_completion]}."
            ),
        )

    logger.info("✓ Completion rows match instance status.")
