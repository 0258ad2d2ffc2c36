"""
Wegesa Reporting Engine
"""

from engines.reporting.services import (
    BookingSummary,
    DashboardStats,
    FinanceSummary,
    HRSummary,
    PeriodReport,
    StoreBreakdown,
    booking_summary,
    dashboard_stats,
    finance_summary,
    hr_summary,
    period_report,
    top_dispatched_items,
)

__all__ = [
    "BookingSummary",
    "DashboardStats",
    "FinanceSummary",
    "HRSummary",
    "PeriodReport",
    "StoreBreakdown",
    "booking_summary",
    "dashboard_stats",
    "finance_summary",
    "hr_summary",
    "period_report",
    "top_dispatched_items",
]
