"""
Ops Housekeeping — Errors
===========================
Distinct failure types for marking and agenda reads.

Every error carries a stable machine `code` so transport layers
can map it without inspecting messages. The three types are never
collapsed into a generic failure.
"""

from __future__ import annotations


class HousekeepingError(Exception):
    """Base error for housekeeping operations."""

    code = "HOUSEKEEPING_ERROR"


class NotFound(HousekeepingError):
    """Referenced task instance does not exist. Caller error, not retried."""

    code = "INSTANCE_NOT_FOUND"

    def __init__(self, instance_id):
        self.instance_id = instance_id
        super().__init__(f"Task instance {instance_id} was not found.")


class WindowClosed(HousekeepingError):
    """
    Instance exists but is not markable right now: its window has
    elapsed (or not opened yet), or it is already resolved.

    Expected, user-facing outcome. Not a system error.
    """

    code = "WINDOW_CLOSED"

    def __init__(self, instance_id, *, status: str, reason: str):
        self.instance_id = instance_id
        self.status = status
        self.reason = reason
        super().__init__(
            f"Window closed for task instance {instance_id}: {reason}."
        )


class StorageError(HousekeepingError):
    """
    Backing store failed to read or write.

    The original database exception is chained as __cause__ and its
    text kept in `detail`; retry decisions belong to the caller.
    """

    code = "STORAGE_ERROR"

    def __init__(self, operation: str, detail: str, *, error_type: str = ""):
        self.operation = operation
        self.detail = detail
        self.error_type = error_type
        super().__init__(f"Storage failure during {operation}: {detail}")

    @classmethod
    def wrap(cls, operation: str, exc: BaseException) -> "StorageError":
        return cls(operation, str(exc), error_type=type(exc).__name__)
