"""
Wegesa Finance Engine — Records
=================================
Invoices and cash-book transactions.

RULES:
- Money is Decimal, rounded half-up to 2 places on output
- Invoice line totals, subtotal, tax and total are derived, never stored
- tax_rate is a percentage (18 means 18 %)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from core.time import ensure_aware

_CENT = Decimal("0.01")


def to_money(value: Any, field_name: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise ValueError(f"{field_name} must be a number, got {type(value).__name__}.")
    try:
        amount = Decimal(str(value))
    except ArithmeticError as exc:
        raise ValueError(f"{field_name} '{value}' is not a number.") from exc
    if not amount.is_finite():
        raise ValueError(f"{field_name} must be a finite number, got {value}.")
    return amount


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


def _require_text(value: Any, field_name: str) -> None:
    if not value or not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string.")


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class InvoiceStatus(Enum):
    DRAFT = "DRAFT"
    SENT = "SENT"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


class TransactionType(Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


# ══════════════════════════════════════════════════════════════
# INVOICE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class InvoiceItem:
    description: str
    quantity: int
    unit_price: Decimal

    def __post_init__(self):
        _require_text(self.description, "description")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity <= 0:
            raise ValueError("quantity must be a positive integer.")
        if not isinstance(self.unit_price, Decimal) or not self.unit_price.is_finite() or self.unit_price < 0:
            raise ValueError("unit_price must be a non-negative Decimal.")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InvoiceItem:
        return cls(
            description=data["description"],
            quantity=data["quantity"],
            unit_price=to_money(data["unit_price"], "unit_price"),
        )

    @property
    def total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> dict:
        return {
            "description": self.description,
            "quantity": self.quantity,
            "unit_price": str(self.unit_price),
            "total": str(round_money(self.total)),
        }


@dataclass(frozen=True)
class Invoice:
    invoice_id: str
    invoice_number: str
    customer_name: str
    items: Tuple[InvoiceItem, ...]
    tax_rate: Decimal
    status: InvoiceStatus
    issue_date: date
    due_date: date
    currency: str
    created_by: str
    created_at: datetime
    updated_at: datetime
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        _require_text(self.invoice_id, "invoice_id")
        _require_text(self.invoice_number, "invoice_number")
        _require_text(self.customer_name, "customer_name")
        _require_text(self.created_by, "created_by")
        if not isinstance(self.items, tuple) or not self.items:
            raise ValueError("invoice must have at least one item.")
        if not all(isinstance(i, InvoiceItem) for i in self.items):
            raise ValueError("items must contain InvoiceItem entries.")
        if not isinstance(self.tax_rate, Decimal) or not Decimal(0) <= self.tax_rate <= Decimal(100):
            raise ValueError("tax_rate must be a Decimal between 0 and 100.")
        if not isinstance(self.status, InvoiceStatus):
            raise ValueError("status must be InvoiceStatus enum.")
        if self.due_date < self.issue_date:
            raise ValueError("due_date must not precede issue_date.")
        ensure_aware(self.created_at, "created_at")
        ensure_aware(self.updated_at, "updated_at")

    @property
    def subtotal(self) -> Decimal:
        return round_money(sum((item.total for item in self.items), Decimal(0)))

    @property
    def tax_amount(self) -> Decimal:
        return round_money(self.subtotal * self.tax_rate / Decimal(100))

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.tax_amount

    def is_past_due(self, today: date) -> bool:
        return self.status is InvoiceStatus.SENT and today > self.due_date

    def to_dict(self) -> dict:
        return {
            "invoice_id": self.invoice_id,
            "invoice_number": self.invoice_number,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "customer_phone": self.customer_phone,
            "customer_address": self.customer_address,
            "items": [item.to_dict() for item in self.items],
            "tax_rate": str(self.tax_rate),
            "subtotal": str(self.subtotal),
            "tax_amount": str(self.tax_amount),
            "total": str(self.total),
            "currency": self.currency,
            "status": self.status.value,
            "issue_date": self.issue_date.isoformat(),
            "due_date": self.due_date.isoformat(),
            "notes": self.notes,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


# ══════════════════════════════════════════════════════════════
# TRANSACTION
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Transaction:
    transaction_id: str
    transaction_type: TransactionType
    description: str
    amount: Decimal
    date: date
    currency: str
    created_by: str
    created_at: datetime
    category: Optional[str] = None
    reference: Optional[str] = None

    def __post_init__(self):
        _require_text(self.transaction_id, "transaction_id")
        _require_text(self.description, "description")
        _require_text(self.created_by, "created_by")
        if not isinstance(self.transaction_type, TransactionType):
            raise ValueError("transaction_type must be TransactionType enum.")
        if not isinstance(self.amount, Decimal) or not self.amount.is_finite() or self.amount <= 0:
            raise ValueError("amount must be a positive Decimal.")
        ensure_aware(self.created_at, "created_at")

    @property
    def signed_amount(self) -> Decimal:
        if self.transaction_type is TransactionType.EXPENSE:
            return -self.amount
        return self.amount

    def to_dict(self) -> dict:
        return {
            "transaction_id": self.transaction_id,
            "transaction_type": self.transaction_type.value,
            "description": self.description,
            "amount": str(self.amount),
            "category": self.category,
            "reference": self.reference,
            "date": self.date.isoformat(),
            "currency": self.currency,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
        }
