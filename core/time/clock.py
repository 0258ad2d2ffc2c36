"""
Wegesa Core Time — Injectable Clock
=====================================
Stores never call datetime.now() directly. Every timestamp
(created_at, returned_at, updated_at) comes from a Clock that
is handed to the store at construction time.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Source of timezone-aware UTC timestamps."""

    def now_utc(self) -> datetime:
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemClock:
    """Wall-clock time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Deterministic clock for tests and demo fixtures.

    Usage:
        clock = FixedClock(datetime(2026, 3, 1, tzinfo=timezone.utc))
        store = AppStore(clock=clock)
        clock.advance(days=3)   # an expected return date is now overdue
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._current = fixed_dt

    def now_utc(self) -> datetime:
        return self._current

    def advance(self, **delta) -> datetime:
        """Move time forward by a timedelta (days=, hours=, ...)."""
        step = timedelta(**delta)
        if step < timedelta(0):
            raise ValueError("FixedClock cannot move backwards.")
        self._current = self._current + step
        return self._current


def ensure_aware(value: datetime, field_name: str) -> datetime:
    """Reject naive datetimes; every stored timestamp carries a tzinfo."""
    if not isinstance(value, datetime):
        raise ValueError(f"{field_name} must be a datetime.")
    if value.tzinfo is None:
        raise ValueError(f"{field_name} must be timezone-aware.")
    return value
