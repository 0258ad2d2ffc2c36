"""
Wegesa Reporting Engine — Stat Calculators
============================================
Read-side figures for the dashboard, reports, finance, bookings
and HR pages.

All functions are pure: they take snapshots and an explicit `now`
and never touch a store.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, Sequence

from core.time import ReportPeriod, TimeWindow, period_window
from engines.bookings.models import BookedEvent, BookingStatus, EventType
from engines.finance.models import Invoice, InvoiceStatus, Transaction, TransactionType
from engines.hr.models import Employee, Gender
from engines.inventory.models import Item, Movement, MovementStatus, StoreId


def _jsonable(data: dict) -> dict:
    return {
        key: str(value) if isinstance(value, Decimal) else value
        for key, value in data.items()
    }


# ══════════════════════════════════════════════════════════════
# DASHBOARD
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DashboardStats:
    total_items: int
    items_in_stock: int
    items_out: int
    active_rentals: int
    overdue_returns: int

    def to_dict(self) -> dict:
        return asdict(self)


def dashboard_stats(
    items: Iterable[Item],
    movements: Iterable[Movement],
    now: datetime,
) -> DashboardStats:
    """
    total_items counts units owned, not item records.
    overdue_returns only counts movements still fully OUT.
    """
    items = tuple(items)
    movements = tuple(movements)
    total = sum(i.quantity for i in items)
    in_stock = sum(i.in_stock for i in items)
    return DashboardStats(
        total_items=total,
        items_in_stock=in_stock,
        items_out=total - in_stock,
        active_rentals=sum(1 for m in movements if m.status is not MovementStatus.RETURNED),
        overdue_returns=sum(1 for m in movements if m.is_overdue(now)),
    )


# ══════════════════════════════════════════════════════════════
# PERIOD REPORT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StoreBreakdown:
    store: str
    total_items: int
    items_in_stock: int
    dispatches: int


@dataclass(frozen=True)
class PeriodReport:
    period: str
    window_start: datetime
    window_end: datetime
    total_dispatches: int
    units_dispatched: int
    completed_returns: int
    active_rentals: int
    overdue_returns: int
    utilization_percent: int
    by_store: Sequence[StoreBreakdown]

    def to_dict(self) -> dict:
        return {
            "period": self.period,
            "window_start": self.window_start.isoformat(),
            "window_end": self.window_end.isoformat(),
            "total_dispatches": self.total_dispatches,
            "units_dispatched": self.units_dispatched,
            "completed_returns": self.completed_returns,
            "active_rentals": self.active_rentals,
            "overdue_returns": self.overdue_returns,
            "utilization_percent": self.utilization_percent,
            "by_store": [asdict(b) for b in self.by_store],
        }


def period_report(
    period: ReportPeriod,
    items: Iterable[Item],
    movements: Iterable[Movement],
    now: datetime,
) -> PeriodReport:
    """
    Dispatch activity for the calendar period containing `now`.

    Dispatch counts use movements created inside the window; active
    and overdue counts cover all movements. Utilization is the share
    of owned units currently out, rounded to a whole percent.
    """
    period = ReportPeriod(period)
    window: TimeWindow = period_window(period, now)
    items = tuple(items)
    movements = tuple(movements)
    in_period = [m for m in movements if window.contains(m.created_at)]

    total = sum(i.quantity for i in items)
    out = total - sum(i.in_stock for i in items)
    utilization = 0
    if total > 0:
        utilization = int(
            (Decimal(out * 100) / Decimal(total)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        )

    by_store = []
    for store in StoreId:
        store_items = [i for i in items if i.store is store]
        by_store.append(StoreBreakdown(
            store=store.value,
            total_items=sum(i.quantity for i in store_items),
            items_in_stock=sum(i.in_stock for i in store_items),
            dispatches=sum(1 for m in in_period if m.store is store),
        ))

    return PeriodReport(
        period=period.value,
        window_start=window.start,
        window_end=window.end,
        total_dispatches=len(in_period),
        units_dispatched=sum(m.total_quantity for m in in_period),
        completed_returns=sum(1 for m in in_period if m.status is MovementStatus.RETURNED),
        active_rentals=sum(1 for m in movements if m.status is not MovementStatus.RETURNED),
        overdue_returns=sum(1 for m in movements if m.is_overdue(now)),
        utilization_percent=utilization,
        by_store=tuple(by_store),
    )


def top_dispatched_items(
    movements: Iterable[Movement],
    limit: int = 5,
) -> Sequence[tuple]:
    """(item_id, units) pairs, most dispatched first; ties by item id."""
    units: Dict[str, int] = {}
    for movement in movements:
        for line in movement.lines:
            units[line.item_id] = units.get(line.item_id, 0) + line.quantity
    ranked = sorted(units.items(), key=lambda pair: (-pair[1], pair[0]))
    return tuple(ranked[:limit])


# ══════════════════════════════════════════════════════════════
# FINANCE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class FinanceSummary:
    total_invoices: int
    paid_invoices: int
    overdue_invoices: int
    total_revenue: Decimal
    total_income: Decimal
    total_expense: Decimal
    net_profit: Decimal

    def to_dict(self) -> dict:
        return _jsonable(asdict(self))


def finance_summary(
    invoices: Iterable[Invoice],
    transactions: Iterable[Transaction],
) -> FinanceSummary:
    """Revenue is the total of PAID invoices; profit comes from transactions only."""
    invoices = tuple(invoices)
    transactions = tuple(transactions)
    income = sum(
        (t.amount for t in transactions if t.transaction_type is TransactionType.INCOME),
        Decimal(0),
    )
    expense = sum(
        (t.amount for t in transactions if t.transaction_type is TransactionType.EXPENSE),
        Decimal(0),
    )
    return FinanceSummary(
        total_invoices=len(invoices),
        paid_invoices=sum(1 for i in invoices if i.status is InvoiceStatus.PAID),
        overdue_invoices=sum(1 for i in invoices if i.status is InvoiceStatus.OVERDUE),
        total_revenue=sum(
            (i.total for i in invoices if i.status is InvoiceStatus.PAID), Decimal(0),
        ),
        total_income=income,
        total_expense=expense,
        net_profit=income - expense,
    )


# ══════════════════════════════════════════════════════════════
# BOOKINGS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class BookingSummary:
    total: int
    confirmed: int
    pending: int
    completed: int
    total_revenue: Decimal
    pending_payments: Decimal
    by_event_type: Dict[str, int]

    def to_dict(self) -> dict:
        return _jsonable(asdict(self))


def booking_summary(bookings: Iterable[BookedEvent]) -> BookingSummary:
    """Cancelled bookings count toward no money figure."""
    bookings = tuple(bookings)
    live = [b for b in bookings if not b.is_cancelled]
    return BookingSummary(
        total=len(bookings),
        confirmed=sum(1 for b in bookings if b.status is BookingStatus.CONFIRMED),
        pending=sum(1 for b in bookings if b.status is BookingStatus.PENDING),
        completed=sum(1 for b in bookings if b.status is BookingStatus.COMPLETED),
        total_revenue=sum((b.amount for b in live if b.is_paid), Decimal(0)),
        pending_payments=sum((b.amount for b in live if not b.is_paid), Decimal(0)),
        by_event_type={
            t.value: sum(1 for b in bookings if b.event_type is t) for t in EventType
        },
    )


# ══════════════════════════════════════════════════════════════
# HR
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class HRSummary:
    total: int
    active: int
    inactive: int
    male: int
    female: int

    def to_dict(self) -> dict:
        return asdict(self)


def hr_summary(employees: Iterable[Employee]) -> HRSummary:
    employees = tuple(employees)
    active = sum(1 for e in employees if e.is_active)
    return HRSummary(
        total=len(employees),
        active=active,
        inactive=len(employees) - active,
        male=sum(1 for e in employees if e.gender is Gender.MALE),
        female=sum(1 for e in employees if e.gender is Gender.FEMALE),
    )
