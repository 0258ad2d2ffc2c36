"""
Wegesa Bookings Engine — Application Service
==============================================
Event calendar: weddings, send-offs, corporate events and rentals.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from core.store import CrudService
from core.time import TimeWindow, parse_date
from engines.bookings.models import BookedEvent, BookingStatus, EventType
from engines.finance.models import to_money


class BookingService(CrudService[BookedEvent]):
    record_type = BookedEvent
    entity_name = "BookedEvent"
    id_field = "booking_id"
    read_only = ("created_by", "created_at", "updated_at")
    logger_name = "wegesa.bookings"

    def _coerce_patch(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        if "event_type" in patch:
            patch["event_type"] = EventType(patch["event_type"])
        if "status" in patch:
            patch["status"] = BookingStatus(patch["status"])
        if "amount" in patch:
            patch["amount"] = to_money(patch["amount"], "amount")
        if "event_date" in patch:
            patch["event_date"] = parse_date(patch["event_date"], "event_date")
        return patch

    def add_booking(
        self,
        *,
        customer_name: str,
        event_date,
        event_type,
        venue: str,
        amount,
        created_by: str,
        is_paid: bool = False,
        status=BookingStatus.CONFIRMED,
        customer_phone: Optional[str] = None,
        customer_email: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> BookedEvent:
        fields = self._coerce_patch({
            "event_date": event_date,
            "event_type": event_type,
            "status": status,
            "amount": amount,
        })
        return self._create(lambda new_id, now: BookedEvent(
            booking_id=new_id,
            customer_name=customer_name,
            venue=venue,
            is_paid=is_paid,
            created_by=created_by,
            created_at=now,
            updated_at=now,
            customer_phone=customer_phone or None,
            customer_email=customer_email or None,
            notes=notes or None,
            **fields,
        ))

    def list_bookings(
        self,
        *,
        search: Optional[str] = None,
        event_type=None,
        status=None,
    ) -> List[BookedEvent]:
        """Search matches customer name or venue."""
        needle = (search or "").strip().lower()
        type_filter = EventType(event_type) if event_type is not None else None
        status_filter = BookingStatus(status) if status is not None else None
        return self.list(
            lambda b: (type_filter is None or b.event_type is type_filter)
            and (status_filter is None or b.status is status_filter)
            and (
                not needle
                or needle in b.customer_name.lower()
                or needle in b.venue.lower()
            )
        )

    def bookings_on(self, day: date) -> List[BookedEvent]:
        return self.list(lambda b: b.event_date == day)

    def bookings_between(self, window: TimeWindow) -> List[BookedEvent]:
        """Calendar view: events whose date falls inside the window."""
        start, end = window.start.date(), window.end.date()
        ordered = sorted(self.list(), key=lambda b: b.event_date)
        return [b for b in ordered if start <= b.event_date <= end]
