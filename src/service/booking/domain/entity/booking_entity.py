from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import attrs

from src.service.booking.domain.enum.booking_status import BookingStatus


@attrs.define(frozen=True)
class Booking:
    """Booking as confirmed by the museum API."""

    id: str
    booking_date: date
    time_slot_id: str
    ticket_type_id: str
    quantity: int
    total_price: Decimal
    status: BookingStatus = BookingStatus.PENDING
    source: str = 'ONLINE'
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    user_id: Optional[str] = None
    order_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
