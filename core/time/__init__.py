"""
Ops Core Time — Public API
============================
Explicit clock protocol and temporal helpers.
Doctrine: NO datetime.now() in housekeeping logic.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    now_utc,
    set_default_clock,
    today_utc,
)
from core.time.temporal import TimeWindow, window_ending_at

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_default_clock",
    "set_default_clock",
    "now_utc",
    "today_utc",
    "TimeWindow",
    "window_ending_at",
]
