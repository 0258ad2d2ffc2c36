"""
Wegesa App Store — Store
==========================
"""

from __future__ import annotations

import logging
from typing import Optional

from core.config import AppSettings
from core.ids import IdProvider, RandomIdProvider
from core.time import Clock, ReportPeriod, SystemClock
from engines.app_store.seed import seed_demo_data
from engines.bookings import BookingService
from engines.finance import InvoiceService, TransactionService
from engines.hr import HRService
from engines.inventory import InventoryLedger
from engines.reporting import (
    BookingSummary,
    DashboardStats,
    FinanceSummary,
    HRSummary,
    PeriodReport,
    booking_summary,
    dashboard_stats,
    finance_summary,
    hr_summary,
    period_report,
)
from engines.users import UserService

logger = logging.getLogger("wegesa.app")


class AppStore:
    """
    Holds the ledger and the CRUD services for one running instance.

    The reporting shortcuts read a fresh snapshot on every call and
    evaluate time-based figures against the shared clock.
    """

    def __init__(
        self,
        *,
        settings: Optional[AppSettings] = None,
        clock: Optional[Clock] = None,
        id_provider: Optional[IdProvider] = None,
    ):
        self.settings = settings or AppSettings()
        self.clock = clock or SystemClock()
        self.id_provider = id_provider or RandomIdProvider()

        shared = {"clock": self.clock, "id_provider": self.id_provider}
        self.inventory = InventoryLedger(**shared)
        self.users = UserService(**shared)
        self.hr = HRService(**shared)
        self.invoices = InvoiceService(settings=self.settings, **shared)
        self.transactions = TransactionService(settings=self.settings, **shared)
        self.bookings = BookingService(**shared)

        if self.settings.seed_demo_data:
            seed_demo_data(self)

    # ── Reporting ─────────────────────────────────────────────

    def dashboard_stats(self) -> DashboardStats:
        snapshot = self.inventory.snapshot()
        return dashboard_stats(snapshot.items, snapshot.movements, self.clock.now_utc())

    def period_report(self, period=ReportPeriod.MONTH) -> PeriodReport:
        snapshot = self.inventory.snapshot()
        return period_report(
            ReportPeriod(period),
            snapshot.items,
            snapshot.movements,
            self.clock.now_utc(),
        )

    def finance_summary(self) -> FinanceSummary:
        return finance_summary(self.invoices.list(), self.transactions.list())

    def booking_summary(self) -> BookingSummary:
        return booking_summary(self.bookings.list())

    def hr_summary(self) -> HRSummary:
        return hr_summary(self.hr.list())
