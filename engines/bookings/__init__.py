"""
Wegesa Bookings Engine
"""

from engines.bookings.models import BookedEvent, BookingStatus, EventType
from engines.bookings.services import BookingService

__all__ = ["BookedEvent", "BookingStatus", "EventType", "BookingService"]
