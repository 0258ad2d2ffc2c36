"""
Wegesa Reporting Engine Tests
=============================
Dashboard, period report and the finance / bookings / HR stat cards.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from core.ids import SequenceIdProvider
from core.time import FixedClock, ReportPeriod
from engines.bookings import BookingService
from engines.finance import InvoiceService, TransactionService
from engines.hr import HRService
from engines.inventory import InventoryLedger, StoreId
from engines.reporting import (
    booking_summary,
    dashboard_stats,
    finance_summary,
    hr_summary,
    period_report,
    top_dispatched_items,
)

# Wednesday
NOW = datetime(2026, 5, 13, 10, 0, 0, tzinfo=timezone.utc)


def _ledger_with_activity():
    """
    chairs 100 @BOBA, lights 20 @MIKOCHENI.
    m_old:  April, 10 chairs, fully returned
    m_out:  May, 30 chairs, still OUT, due yesterday
    m_part: May, 5 lights, 2 returned
    """
    clock = FixedClock(NOW - timedelta(days=30))
    ledger = InventoryLedger(clock=clock, id_provider=SequenceIdProvider("id"))
    chairs = ledger.add_item(name="Chairs", quantity=100, store=StoreId.BOBA)
    lights = ledger.add_item(name="Lights", quantity=20, store=StoreId.MIKOCHENI)

    common = dict(
        customer_name="Amani", responsible_person="Baraka", use_location="Hall",
        authorized_by_user_id="u1", issued_by_user_id="u3",
    )
    m_old = ledger.create_dispatch(
        store=StoreId.BOBA, lines=[(chairs.item_id, 10)],
        expected_return_at=clock.now_utc() + timedelta(days=2), **common,
    )
    ledger.register_return(m_old, "u3", [(chairs.item_id, 10)])

    clock.advance(days=28)
    m_out = ledger.create_dispatch(
        store=StoreId.BOBA, lines=[(chairs.item_id, 30)],
        expected_return_at=NOW - timedelta(days=1), **common,
    )
    m_part = ledger.create_dispatch(
        store=StoreId.MIKOCHENI, lines=[(lights.item_id, 5)],
        expected_return_at=NOW - timedelta(days=1), **common,
    )
    ledger.register_return(m_part, "u3", [(lights.item_id, 2)])
    clock.advance(days=2)
    return ledger, chairs.item_id, lights.item_id


class TestDashboardStats:
    def test_counts(self):
        ledger, _, _ = _ledger_with_activity()
        snapshot = ledger.snapshot()
        stats = dashboard_stats(snapshot.items, snapshot.movements, NOW)
        assert stats.total_items == 120
        assert stats.items_in_stock == 70 + 17
        assert stats.items_out == 33
        assert stats.active_rentals == 2
        # the partially returned movement is not counted as overdue
        assert stats.overdue_returns == 1
        assert stats.to_dict()["items_out"] == 33

    def test_overdue_count_matches_ledger(self):
        ledger, _, _ = _ledger_with_activity()
        snapshot = ledger.snapshot()
        for now in (NOW - timedelta(days=3), NOW, NOW + timedelta(days=30)):
            stats = dashboard_stats(snapshot.items, snapshot.movements, now)
            assert stats.overdue_returns == len(ledger.overdue_movements(now))

    def test_empty(self):
        stats = dashboard_stats([], [], NOW)
        assert stats.total_items == 0
        assert stats.overdue_returns == 0


class TestPeriodReport:
    def test_month(self):
        ledger, _, _ = _ledger_with_activity()
        snapshot = ledger.snapshot()
        report = period_report(ReportPeriod.MONTH, snapshot.items, snapshot.movements, NOW)
        assert report.window_start == datetime(2026, 5, 1, tzinfo=timezone.utc)
        assert report.total_dispatches == 2
        assert report.units_dispatched == 35
        assert report.completed_returns == 0
        assert report.active_rentals == 2
        assert report.overdue_returns == 1
        # 33 of 120 units out
        assert report.utilization_percent == 28

    def test_quarter_includes_april(self):
        ledger, _, _ = _ledger_with_activity()
        snapshot = ledger.snapshot()
        report = period_report("QUARTER", snapshot.items, snapshot.movements, NOW)
        assert report.total_dispatches == 3
        assert report.completed_returns == 1

    def test_per_store_breakdown(self):
        ledger, _, _ = _ledger_with_activity()
        snapshot = ledger.snapshot()
        report = period_report(ReportPeriod.YEAR, snapshot.items, snapshot.movements, NOW)
        by_store = {b.store: b for b in report.by_store}
        assert by_store["BOBA"].total_items == 100
        assert by_store["BOBA"].items_in_stock == 70
        assert by_store["BOBA"].dispatches == 2
        assert by_store["MIKOCHENI"].items_in_stock == 17
        assert by_store["MIKOCHENI"].dispatches == 1

    def test_to_dict_is_wire_friendly(self):
        ledger, _, _ = _ledger_with_activity()
        snapshot = ledger.snapshot()
        data = period_report(ReportPeriod.WEEK, snapshot.items, snapshot.movements, NOW).to_dict()
        assert data["period"] == "WEEK"
        assert data["window_start"] == "2026-05-10T00:00:00+00:00"
        assert [b["store"] for b in data["by_store"]] == ["BOBA", "MIKOCHENI"]

    def test_utilization_rounds_half_up(self):
        clock = FixedClock(NOW)
        ledger = InventoryLedger(clock=clock, id_provider=SequenceIdProvider("id"))
        item = ledger.add_item(name="Chairs", quantity=8, store=StoreId.BOBA, in_stock=7)
        snapshot = ledger.snapshot()
        # 1 of 8 out is 12.5 %
        report = period_report(ReportPeriod.MONTH, snapshot.items, [], NOW)
        assert item.out_quantity == 1
        assert report.utilization_percent == 13

    def test_no_items_means_zero_utilization(self):
        report = period_report(ReportPeriod.MONTH, [], [], NOW)
        assert report.utilization_percent == 0

    def test_top_dispatched_items(self):
        ledger, chairs_id, lights_id = _ledger_with_activity()
        ranked = top_dispatched_items(ledger.list_movements())
        assert ranked == ((chairs_id, 40), (lights_id, 5))
        assert top_dispatched_items(ledger.list_movements(), limit=1) == ((chairs_id, 40),)


class TestFinanceSummary:
    def test_summary(self):
        clock = FixedClock(NOW)
        invoices = InvoiceService(clock=clock, id_provider=SequenceIdProvider("i"))
        transactions = TransactionService(clock=clock, id_provider=SequenceIdProvider("t"))
        item = [{"description": "Tent", "quantity": 1, "unit_price": "1000"}]
        invoices.add_invoice(customer_name="A", items=item, created_by="u1", status="PAID")
        invoices.add_invoice(customer_name="B", items=item, created_by="u1", status="OVERDUE")
        invoices.add_invoice(customer_name="C", items=item, created_by="u1")
        transactions.add_transaction(
            transaction_type="INCOME", description="Deposit", amount="5000", created_by="u1",
        )
        transactions.add_transaction(
            transaction_type="EXPENSE", description="Fuel", amount="1200.50", created_by="u1",
        )

        summary = finance_summary(invoices.list(), transactions.list())
        assert summary.total_invoices == 3
        assert summary.paid_invoices == 1
        assert summary.overdue_invoices == 1
        assert summary.total_revenue == Decimal("1180.00")
        assert summary.total_income == Decimal("5000")
        assert summary.total_expense == Decimal("1200.50")
        assert summary.net_profit == Decimal("3799.50")
        assert summary.to_dict()["net_profit"] == "3799.50"

    def test_empty(self):
        summary = finance_summary([], [])
        assert summary.total_revenue == Decimal(0)
        assert summary.net_profit == Decimal(0)


class TestBookingSummary:
    def test_summary(self):
        service = BookingService(clock=FixedClock(NOW), id_provider=SequenceIdProvider("b"))
        common = dict(event_date="2026-06-01", venue="Serena", created_by="u2")
        service.add_booking(customer_name="A", event_type="WEDDING", amount=1000, is_paid=True, **common)
        service.add_booking(customer_name="B", event_type="CORPORATE", amount=400, status="PENDING", **common)
        service.add_booking(customer_name="C", event_type="SENDOFF", amount=300,
                            is_paid=True, status="CANCELLED", **common)
        service.add_booking(customer_name="D", event_type="WEDDING", amount=50, status="CANCELLED", **common)
        service.add_booking(customer_name="E", event_type="RENTALS", amount=70, status="COMPLETED", **common)

        summary = booking_summary(service.list())
        assert summary.total == 5
        assert summary.confirmed == 1
        assert summary.pending == 1
        assert summary.completed == 1
        assert summary.total_revenue == Decimal("1000")
        assert summary.pending_payments == Decimal("470")
        assert summary.by_event_type == {
            "WEDDING": 2, "SENDOFF": 1, "CORPORATE": 1, "RENTALS": 1, "OTHER": 0,
        }
        assert summary.to_dict()["total_revenue"] == "1000"


class TestHRSummary:
    def test_summary(self):
        hr = HRService(clock=FixedClock(NOW), id_provider=SequenceIdProvider("e"))
        common = dict(
            date_of_birth="1990-01-01", position="Crew", mobile_contact="+255 700 000 000",
            contract_start_date="2024-01-01", contract_end_date="2026-12-31",
        )
        hr.add_employee(full_name="John", gender="MALE", **common)
        hr.add_employee(full_name="Sarah", gender="FEMALE", **common)
        hr.add_employee(full_name="Ali", gender="MALE", is_active=False, **common)

        summary = hr_summary(hr.list())
        assert summary.to_dict() == {
            "total": 3, "active": 2, "inactive": 1, "male": 2, "female": 1,
        }
