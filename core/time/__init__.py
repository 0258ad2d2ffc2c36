"""
Wegesa Core Time — Public API
===============================
Injectable clock and reporting-period helpers.
"""

from core.time.clock import Clock, FixedClock, SystemClock, ensure_aware
from core.time.parsing import parse_date, parse_datetime
from core.time.temporal import ReportPeriod, TimeWindow, is_past, period_window

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "ensure_aware",
    "parse_date",
    "parse_datetime",
    "ReportPeriod",
    "TimeWindow",
    "is_past",
    "period_window",
]
