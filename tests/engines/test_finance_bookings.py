"""
Wegesa Finance & Bookings Engine Tests
======================================
Invoices (numbering, derived totals), cash-book transactions and
the event calendar.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from core.config import AppSettings
from core.ids import SequenceIdProvider
from core.store import PatchError
from core.time import FixedClock, TimeWindow
from engines.bookings import BookingService, BookingStatus, EventType
from engines.finance import (
    InvoiceItem,
    InvoiceService,
    InvoiceStatus,
    TransactionService,
    TransactionType,
)
from engines.finance.models import round_money, to_money

NOW = datetime(2026, 2, 19, 12, 0, 0, tzinfo=timezone.utc)

ITEMS = [
    {"description": "Tent hire", "quantity": 2, "unit_price": "150000"},
    {"description": "Chairs", "quantity": 100, "unit_price": "500.50"},
]


def _invoices(**settings):
    clock = FixedClock(NOW)
    service = InvoiceService(
        settings=AppSettings(**settings),
        clock=clock,
        id_provider=SequenceIdProvider("inv"),
    )
    return service, clock


def _invoice(service, **overrides):
    fields = dict(customer_name="Amani Weddings", items=ITEMS, created_by="u1")
    fields.update(overrides)
    return service.add_invoice(**fields)


# ══════════════════════════════════════════════════════════════
# MONEY
# ══════════════════════════════════════════════════════════════

class TestMoney:
    def test_to_money(self):
        assert to_money("10.25", "amount") == Decimal("10.25")
        assert to_money(3, "amount") == Decimal("3")
        assert to_money(0.1, "amount") == Decimal("0.1")

    def test_to_money_rejects(self):
        with pytest.raises(ValueError, match="must be a number"):
            to_money(True, "amount")
        with pytest.raises(ValueError, match="not a number"):
            to_money("ten", "amount")

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-inf", float("nan"), Decimal("sNaN")])
    def test_to_money_rejects_non_finite(self, value):
        with pytest.raises(ValueError, match="finite"):
            to_money(value, "amount")

    def test_nan_unit_price_is_a_value_error(self):
        with pytest.raises(ValueError, match="unit_price"):
            InvoiceItem.from_dict({"description": "x", "quantity": 1, "unit_price": "NaN"})
        with pytest.raises(ValueError, match="unit_price"):
            InvoiceItem(description="x", quantity=1, unit_price=Decimal("NaN"))

    def test_round_half_up(self):
        assert round_money(Decimal("2.345")) == Decimal("2.35")
        assert round_money(Decimal("2.344")) == Decimal("2.34")


# ══════════════════════════════════════════════════════════════
# INVOICES
# ══════════════════════════════════════════════════════════════

class TestInvoices:
    def test_defaults_from_settings(self):
        service, _ = _invoices()
        invoice = _invoice(service)
        assert invoice.invoice_number == "WGS-2026-001"
        assert invoice.status is InvoiceStatus.DRAFT
        assert invoice.currency == "TZS"
        assert invoice.tax_rate == Decimal("18")
        assert invoice.issue_date == date(2026, 2, 19)
        assert invoice.due_date == date(2026, 3, 21)

    def test_derived_totals(self):
        service, _ = _invoices()
        invoice = _invoice(service)
        assert invoice.items[1].total == Decimal("50050.00")
        assert invoice.subtotal == Decimal("350050.00")
        assert invoice.tax_amount == Decimal("63009.00")
        assert invoice.total == Decimal("413059.00")
        data = invoice.to_dict()
        assert data["total"] == "413059.00"
        assert data["items"][0]["total"] == "300000.00"

    def test_tax_rounding(self):
        service, _ = _invoices()
        invoice = _invoice(
            service,
            items=[{"description": "Mic", "quantity": 1, "unit_price": "10.05"}],
            tax_rate="18",
        )
        # 10.05 * 0.18 = 1.809
        assert invoice.tax_amount == Decimal("1.81")
        assert invoice.total == Decimal("11.86")

    def test_numbering_per_year(self):
        service, _ = _invoices(invoice_prefix="EVT")
        first = _invoice(service)
        second = _invoice(service)
        other_year = _invoice(service, issue_date="2025-12-30")
        assert first.invoice_number == "EVT-2026-001"
        assert second.invoice_number == "EVT-2026-002"
        assert other_year.invoice_number == "EVT-2025-001"
        assert service.next_invoice_number(2026) == "EVT-2026-003"

    def test_numbers_not_reused_after_delete(self):
        service, _ = _invoices()
        _invoice(service)
        second = _invoice(service)
        third = _invoice(service)
        service.delete(second.invoice_id)
        assert service.next_invoice_number() == "WGS-2026-004"
        service.delete(third.invoice_id)
        assert service.next_invoice_number() == "WGS-2026-002"

    def test_due_before_issue_rejected(self):
        service, _ = _invoices()
        with pytest.raises(ValueError, match="due_date"):
            _invoice(service, issue_date="2026-02-19", due_date="2026-02-01")

    def test_needs_items(self):
        service, _ = _invoices()
        with pytest.raises(ValueError, match="at least one item"):
            _invoice(service, items=[])

    def test_invoice_item_validation(self):
        with pytest.raises(ValueError, match="quantity"):
            InvoiceItem(description="x", quantity=0, unit_price=Decimal("1"))
        with pytest.raises(ValueError, match="unit_price"):
            InvoiceItem.from_dict({"description": "x", "quantity": 1, "unit_price": "-1"})

    def test_update_status_and_items(self):
        service, clock = _invoices()
        invoice = _invoice(service)
        clock.advance(days=1)
        updated = service.update(invoice.invoice_id, {
            "status": "PAID",
            "items": [{"description": "Tent hire", "quantity": 1, "unit_price": 100}],
        })
        assert updated.status is InvoiceStatus.PAID
        assert updated.subtotal == Decimal("100.00")
        assert updated.updated_at == clock.now_utc()

    def test_number_is_read_only(self):
        service, _ = _invoices()
        invoice = _invoice(service)
        with pytest.raises(PatchError):
            service.update(invoice.invoice_id, {"invoice_number": "WGS-2026-999"})

    def test_mark_overdue(self):
        service, _ = _invoices()
        sent = _invoice(service, status="SENT", due_date="2026-02-20")
        draft = _invoice(service, due_date="2026-02-20")
        assert service.mark_overdue(today=date(2026, 2, 20)) == []
        flipped = service.mark_overdue(today=date(2026, 2, 21))
        assert [i.invoice_id for i in flipped] == [sent.invoice_id]
        assert service.get(sent.invoice_id).status is InvoiceStatus.OVERDUE
        assert service.get(draft.invoice_id).status is InvoiceStatus.DRAFT

    def test_list_invoices(self):
        service, _ = _invoices()
        _invoice(service, customer_name="Amani Weddings")
        _invoice(service, customer_name="Kilimo Corp", status="PAID")
        assert [i.customer_name for i in service.list_invoices(search="kilimo")] == ["Kilimo Corp"]
        assert [i.customer_name for i in service.list_invoices(search="2026-001")] == ["Amani Weddings"]
        assert [i.customer_name for i in service.list_invoices(status="PAID")] == ["Kilimo Corp"]


# ══════════════════════════════════════════════════════════════
# TRANSACTIONS
# ══════════════════════════════════════════════════════════════

class TestTransactions:
    def _service(self):
        return TransactionService(clock=FixedClock(NOW), id_provider=SequenceIdProvider("t"))

    def test_add_and_net_total(self):
        service = self._service()
        income = service.add_transaction(
            transaction_type="INCOME", description="Wedding deposit",
            amount="500000", created_by="u1", category="Events",
        )
        service.add_transaction(
            transaction_type=TransactionType.EXPENSE, description="Fuel",
            amount=120000, created_by="u2", reference="RCPT-9",
        )
        assert income.date == date(2026, 2, 19)
        assert income.currency == "TZS"
        assert service.net_total() == Decimal("380000")

    def test_amount_must_be_positive(self):
        service = self._service()
        with pytest.raises(ValueError, match="amount"):
            service.add_transaction(
                transaction_type="EXPENSE", description="Refund", amount=0, created_by="u1",
            )

    def test_list_transactions(self):
        service = self._service()
        service.add_transaction(
            transaction_type="INCOME", description="Deposit", amount=10,
            created_by="u1", category="Events",
        )
        service.add_transaction(
            transaction_type="EXPENSE", description="Fuel", amount=5,
            created_by="u1", reference="RCPT-9",
        )
        assert [t.description for t in service.list_transactions(transaction_type="EXPENSE")] == ["Fuel"]
        assert [t.description for t in service.list_transactions(search="events")] == ["Deposit"]
        assert [t.description for t in service.list_transactions(search="rcpt")] == ["Fuel"]


# ══════════════════════════════════════════════════════════════
# BOOKINGS
# ══════════════════════════════════════════════════════════════

class TestBookings:
    def _service(self):
        clock = FixedClock(NOW)
        return BookingService(clock=clock, id_provider=SequenceIdProvider("b")), clock

    def _book(self, service, **overrides):
        fields = dict(
            customer_name="Amani & Zawadi",
            event_date="2026-03-14",
            event_type="WEDDING",
            venue="Serena Hotel",
            amount="2500000",
            created_by="u2",
        )
        fields.update(overrides)
        return service.add_booking(**fields)

    def test_add_booking(self):
        service, _ = self._service()
        booking = self._book(service)
        assert booking.event_date == date(2026, 3, 14)
        assert booking.event_type is EventType.WEDDING
        assert booking.status is BookingStatus.CONFIRMED
        assert booking.amount == Decimal("2500000")
        assert booking.is_paid is False
        assert booking.to_dict()["amount"] == "2500000"

    def test_negative_amount_rejected(self):
        service, _ = self._service()
        with pytest.raises(ValueError, match="amount"):
            self._book(service, amount=-1)

    def test_cancel(self):
        service, _ = self._service()
        booking = self._book(service)
        cancelled = service.update(booking.booking_id, {"status": "CANCELLED"})
        assert cancelled.is_cancelled

    def test_list_and_calendar(self):
        service, _ = self._service()
        wedding = self._book(service)
        corporate = self._book(
            service, customer_name="Kilimo Corp", event_type="CORPORATE",
            venue="Hyatt", event_date="2026-04-02",
        )
        assert service.list_bookings(event_type="CORPORATE") == [corporate]
        assert service.list_bookings(search="serena") == [wedding]
        assert service.bookings_on(date(2026, 4, 2)) == [corporate]
        march = TimeWindow(
            start=datetime(2026, 3, 1, tzinfo=timezone.utc),
            end=datetime(2026, 3, 31, 23, 59, tzinfo=timezone.utc),
        )
        assert service.bookings_between(march) == [wedding]
