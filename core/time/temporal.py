"""
Wegesa Core Time — Reporting Periods
======================================
Pure functions for the WEEK / MONTH / QUARTER / YEAR windows used
by the reports page. All functions take an explicit `now`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class ReportPeriod(Enum):
    WEEK = "WEEK"
    MONTH = "MONTH"
    QUARTER = "QUARTER"
    YEAR = "YEAR"


# ══════════════════════════════════════════════════════════════
# TIME WINDOW — Closed interval [start, end]
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TimeWindow:
    """Closed interval; start <= end is enforced at construction."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"TimeWindow start ({self.start}) must be <= end ({self.end})."
            )

    def contains(self, dt: datetime) -> bool:
        return self.start <= dt <= self.end


def _start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def _end_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=23, minute=59, second=59, microsecond=999999)


def _add_months(dt: datetime, months: int) -> datetime:
    month_index = dt.month - 1 + months
    return dt.replace(year=dt.year + month_index // 12, month=month_index % 12 + 1, day=1)


def period_window(period: ReportPeriod, now: datetime) -> TimeWindow:
    """
    Window of the calendar period containing `now`.

    Weeks run Sunday through Saturday.
    """
    period = ReportPeriod(period)
    today = _start_of_day(now)

    if period is ReportPeriod.WEEK:
        # weekday(): Monday=0 ... Sunday=6
        start = today - timedelta(days=(today.weekday() + 1) % 7)
        end = _end_of_day(start + timedelta(days=6))
    elif period is ReportPeriod.MONTH:
        start = today.replace(day=1)
        end = _end_of_day(_add_months(start, 1) - timedelta(days=1))
    elif period is ReportPeriod.QUARTER:
        first_month = 3 * ((today.month - 1) // 3) + 1
        start = today.replace(month=first_month, day=1)
        end = _end_of_day(_add_months(start, 3) - timedelta(days=1))
    else:
        start = today.replace(month=1, day=1)
        end = _end_of_day(today.replace(month=12, day=31))

    return TimeWindow(start=start, end=end)


def is_past(deadline: datetime, now: datetime) -> bool:
    """True once `now` is strictly after `deadline`."""
    return now > deadline
