"""
Wegesa Finance Engine — Application Service
=============================================
Invoices (numbered per year) and income / expense transactions.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from core.config import AppSettings
from core.ids import IdProvider
from core.store import CrudService
from core.time import Clock, parse_date
from engines.finance.models import (
    Invoice,
    InvoiceItem,
    InvoiceStatus,
    Transaction,
    TransactionType,
    to_money,
)


def _coerce_items(items: Iterable[Any]) -> tuple:
    return tuple(
        item if isinstance(item, InvoiceItem) else InvoiceItem.from_dict(item)
        for item in items
    )


# ══════════════════════════════════════════════════════════════
# INVOICES
# ══════════════════════════════════════════════════════════════

class InvoiceService(CrudService[Invoice]):
    record_type = Invoice
    entity_name = "Invoice"
    id_field = "invoice_id"
    read_only = ("invoice_number", "created_by", "created_at", "updated_at")
    logger_name = "wegesa.finance"

    def __init__(
        self,
        *,
        settings: AppSettings | None = None,
        clock: Clock | None = None,
        id_provider: IdProvider | None = None,
    ):
        super().__init__(clock=clock, id_provider=id_provider)
        self._settings = settings or AppSettings()

    def _coerce_patch(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        if "items" in patch:
            patch["items"] = _coerce_items(patch["items"])
        if "status" in patch:
            patch["status"] = InvoiceStatus(patch["status"])
        if "tax_rate" in patch:
            patch["tax_rate"] = to_money(patch["tax_rate"], "tax_rate")
        for field_name in ("issue_date", "due_date"):
            if field_name in patch:
                patch[field_name] = parse_date(patch[field_name], field_name)
        return patch

    def next_invoice_number(self, year: Optional[int] = None) -> str:
        """
        '<prefix>-<year>-<NNN>', one above the highest number issued that year.

        Deleted invoices never free their number for reuse while a
        higher one exists.
        """
        year = year or self._clock.now_utc().year
        prefix = f"{self._settings.invoice_prefix}-{year}-"
        pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
        highest = 0
        for invoice in self.list():
            match = pattern.match(invoice.invoice_number)
            if match:
                highest = max(highest, int(match.group(1)))
        return f"{prefix}{highest + 1:03d}"

    def add_invoice(
        self,
        *,
        customer_name: str,
        items: Iterable[Any],
        created_by: str,
        issue_date=None,
        due_date=None,
        tax_rate=None,
        status=InvoiceStatus.DRAFT,
        customer_email: Optional[str] = None,
        customer_phone: Optional[str] = None,
        customer_address: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Invoice:
        """Issue date defaults to today; due date to 30 days later."""
        today = self._clock.now_utc().date()
        issue = parse_date(issue_date, "issue_date") if issue_date is not None else today
        due = (
            parse_date(due_date, "due_date")
            if due_date is not None
            else issue + timedelta(days=30)
        )
        rate = (
            to_money(tax_rate, "tax_rate")
            if tax_rate is not None
            else self._settings.default_tax_rate
        )
        with self._lock:
            number = self.next_invoice_number(issue.year)
            return self._create(lambda new_id, now: Invoice(
                invoice_id=new_id,
                invoice_number=number,
                customer_name=customer_name,
                items=_coerce_items(items),
                tax_rate=rate,
                status=InvoiceStatus(status),
                issue_date=issue,
                due_date=due,
                currency=self._settings.currency,
                created_by=created_by,
                created_at=now,
                updated_at=now,
                customer_email=customer_email or None,
                customer_phone=customer_phone or None,
                customer_address=customer_address or None,
                notes=notes or None,
            ))

    def list_invoices(
        self,
        *,
        search: Optional[str] = None,
        status=None,
    ) -> List[Invoice]:
        """Search matches invoice number or customer name, case-insensitively."""
        needle = (search or "").strip().lower()
        status_filter = InvoiceStatus(status) if status is not None else None
        return self.list(
            lambda inv: (status_filter is None or inv.status is status_filter)
            and (
                not needle
                or needle in inv.invoice_number.lower()
                or needle in inv.customer_name.lower()
            )
        )

    def mark_overdue(self, today: Optional[date] = None) -> List[Invoice]:
        """Flip SENT invoices past their due date to OVERDUE."""
        today = today or self._clock.now_utc().date()
        with self._lock:
            return [
                self.update(inv.invoice_id, {"status": InvoiceStatus.OVERDUE})
                for inv in self.list(lambda i: i.is_past_due(today))
            ]


# ══════════════════════════════════════════════════════════════
# TRANSACTIONS
# ══════════════════════════════════════════════════════════════

class TransactionService(CrudService[Transaction]):
    record_type = Transaction
    entity_name = "Transaction"
    id_field = "transaction_id"
    read_only = ("created_by", "created_at")
    logger_name = "wegesa.finance"

    def __init__(
        self,
        *,
        settings: AppSettings | None = None,
        clock: Clock | None = None,
        id_provider: IdProvider | None = None,
    ):
        super().__init__(clock=clock, id_provider=id_provider)
        self._settings = settings or AppSettings()

    def _coerce_patch(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        if "transaction_type" in patch:
            patch["transaction_type"] = TransactionType(patch["transaction_type"])
        if "amount" in patch:
            patch["amount"] = to_money(patch["amount"], "amount")
        if "date" in patch:
            patch["date"] = parse_date(patch["date"], "date")
        return patch

    def add_transaction(
        self,
        *,
        transaction_type,
        description: str,
        amount,
        created_by: str,
        date=None,
        category: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> Transaction:
        fields: Mapping[str, Any] = self._coerce_patch({
            "transaction_type": transaction_type,
            "amount": amount,
            "date": date if date is not None else self._clock.now_utc().date(),
        })
        return self._create(lambda new_id, now: Transaction(
            transaction_id=new_id,
            description=description,
            currency=self._settings.currency,
            created_by=created_by,
            created_at=now,
            category=category or None,
            reference=reference or None,
            **fields,
        ))

    def list_transactions(
        self,
        *,
        search: Optional[str] = None,
        transaction_type=None,
    ) -> List[Transaction]:
        """Search matches description, category or reference."""
        needle = (search or "").strip().lower()
        type_filter = TransactionType(transaction_type) if transaction_type is not None else None
        return self.list(
            lambda t: (type_filter is None or t.transaction_type is type_filter)
            and (
                not needle
                or any(
                    needle in text.lower()
                    for text in (t.description, t.category or "", t.reference or "")
                )
            )
        )

    def net_total(self) -> Decimal:
        return sum((t.signed_amount for t in self.list()), Decimal(0))
