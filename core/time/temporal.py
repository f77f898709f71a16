"""
Ops Core Time — Temporal Helpers
==================================
Pure functions for time interval logic.
All functions take explicit datetime arguments — no hidden clock access.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone


# ══════════════════════════════════════════════════════════════
# TIME WINDOW — Closed interval [start, end]
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TimeWindow:
    """
    A closed time interval [start, end].

    Invariant: start <= end (enforced at construction).
    Both bounds are inclusive: an instant equal to start or end
    is inside the window.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"TimeWindow start ({self.start}) must be <= end ({self.end})."
            )

    def contains(self, dt: datetime) -> bool:
        """Check if datetime falls within window (inclusive)."""
        return self.start <= dt <= self.end

    def has_closed(self, dt: datetime) -> bool:
        """True once dt is strictly past the end bound."""
        return dt > self.end

    def duration(self) -> timedelta:
        return self.end - self.start


# ══════════════════════════════════════════════════════════════
# PURE TEMPORAL FUNCTIONS
# ══════════════════════════════════════════════════════════════

def window_ending_at(
    work_date: date,
    *,
    end_hour: int,
    length_minutes: int,
    end_minute: int = 0,
) -> TimeWindow:
    """
    Build the UTC window of `length_minutes` that closes at
    `end_hour:end_minute` on `work_date`.
    """
    if length_minutes < 0:
        raise ValueError("length_minutes must be >= 0.")
    end = datetime.combine(
        work_date,
        time(hour=end_hour, minute=end_minute),
        tzinfo=timezone.utc,
    )
    return TimeWindow(start=end - timedelta(minutes=length_minutes), end=end)
