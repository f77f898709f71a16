"""
Ops HTTP API - Contracts
========================
Framework-agnostic request/response DTOs for housekeeping endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional


def _check_optional_date(value: Any, field_name: str) -> None:
    if value is None:
        return
    if isinstance(value, datetime) or not isinstance(value, date):
        raise ValueError(f"{field_name} must be a date or None.")


def _check_optional_text(value: Any, field_name: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string or None.")


@dataclass(frozen=True)
class AgendaReadRequest:
    work_date: Optional[date] = None

    def __post_init__(self):
        _check_optional_date(self.work_date, "date")


@dataclass(frozen=True)
class MarkInstanceHttpRequest:
    instance_id: str
    completed: bool
    remarks: Optional[str] = None
    supervisor: Optional[str] = None

    def __post_init__(self):
        if not self.instance_id or not isinstance(self.instance_id, str):
            raise ValueError("instance_id must be a non-empty string.")
        if not isinstance(self.completed, bool):
            raise ValueError("completed must be a boolean.")
        _check_optional_text(self.remarks, "remarks")
        _check_optional_text(self.supervisor, "supervisor")


@dataclass(frozen=True)
class SeedDayHttpRequest:
    work_date: Optional[date] = None

    def __post_init__(self):
        _check_optional_date(self.work_date, "date")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            body: dict[str, Any] = {"ok": True, "data": self.data}
            if self.meta:
                body["meta"] = dict(self.meta)
            return body
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
