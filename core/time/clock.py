"""
Ops Core Time — Explicit Clock Protocol
=========================================
Doctrine: NO datetime.now() inside housekeeping logic.
The evaluation time for markability and the completed_at stamp
both come from an injected Clock, so every time-sensitive
decision can be replayed in tests with a FixedClock.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Protocol


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Injectable time source."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemClock:
    """Production clock — real system time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Test clock — returns a fixed timestamp until moved.

    Usage:
        clock = FixedClock(datetime(2025, 1, 1, 9, 30, tzinfo=timezone.utc))
        clock.advance(3600)
        clock.set(datetime(2025, 1, 1, 10, 30, tzinfo=timezone.utc))
    """

    def __init__(self, fixed_dt: datetime) -> None:
        self._fixed_dt = _require_aware(fixed_dt)

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, seconds: float) -> None:
        self._fixed_dt = self._fixed_dt + timedelta(seconds=seconds)

    def set(self, fixed_dt: datetime) -> None:
        self._fixed_dt = _require_aware(fixed_dt)


def _require_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        raise ValueError("FixedClock requires timezone-aware datetime.")
    return value


# ══════════════════════════════════════════════════════════════
# DEFAULT CLOCK (infrastructure use only)
# ══════════════════════════════════════════════════════════════

_default_clock: Clock = SystemClock()


def set_default_clock(clock: Clock) -> None:
    """Override the default clock (testing only)."""
    global _default_clock
    _default_clock = clock


def get_default_clock() -> Clock:
    return _default_clock


def now_utc() -> datetime:
    """Convenience: get current UTC time from default clock."""
    return _default_clock.now_utc()


def today_utc(clock: Clock | None = None) -> date:
    """Calendar date of the clock's current instant, in UTC."""
    source = clock if clock is not None else _default_clock
    return source.now_utc().astimezone(timezone.utc).date()
