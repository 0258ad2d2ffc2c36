"""
Wegesa Bookings Engine — Records
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from core.time import ensure_aware


class EventType(Enum):
    WEDDING = "WEDDING"
    SENDOFF = "SENDOFF"
    CORPORATE = "CORPORATE"
    RENTALS = "RENTALS"
    OTHER = "OTHER"


class BookingStatus(Enum):
    CONFIRMED = "CONFIRMED"
    PENDING = "PENDING"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class BookedEvent:
    """A customer's event on the calendar, with the agreed amount."""
    booking_id: str
    customer_name: str
    event_date: date
    event_type: EventType
    venue: str
    amount: Decimal
    is_paid: bool
    status: BookingStatus
    created_by: str
    created_at: datetime
    updated_at: datetime
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        for field_name in ("booking_id", "customer_name", "venue", "created_by"):
            value = getattr(self, field_name)
            if not value or not isinstance(value, str) or not value.strip():
                raise ValueError(f"{field_name} must be a non-empty string.")
        if not isinstance(self.event_type, EventType):
            raise ValueError("event_type must be EventType enum.")
        if not isinstance(self.status, BookingStatus):
            raise ValueError("status must be BookingStatus enum.")
        if not isinstance(self.amount, Decimal) or not self.amount.is_finite() or self.amount < 0:
            raise ValueError("amount must be a non-negative Decimal.")
        if not isinstance(self.is_paid, bool):
            raise ValueError("is_paid must be a boolean.")
        if not isinstance(self.event_date, date):
            raise ValueError("event_date must be a date.")
        ensure_aware(self.created_at, "created_at")
        ensure_aware(self.updated_at, "updated_at")

    @property
    def is_cancelled(self) -> bool:
        return self.status is BookingStatus.CANCELLED

    def to_dict(self) -> dict:
        return {
            "booking_id": self.booking_id,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "customer_email": self.customer_email,
            "event_date": self.event_date.isoformat(),
            "event_type": self.event_type.value,
            "venue": self.venue,
            "amount": str(self.amount),
            "is_paid": self.is_paid,
            "notes": self.notes,
            "status": self.status.value,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
