"""Create booking payload DTO."""

from decimal import Decimal
from typing import Any, Dict, Optional

import attrs


@attrs.define(frozen=True)
class CreateBookingPayload:
    """
    Body of the booking creation request.

    customer_name / customer_email are only sent for guest bookings;
    signed-in visitors are identified by their session instead.
    """

    booking_date: str
    time_slot_id: str
    ticket_type_id: str
    quantity: int
    total_price: Decimal
    source: str = 'ONLINE'
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None

    def to_json_dict(self) -> Dict[str, Any]:
        data = attrs.asdict(self)
        data['total_price'] = float(self.total_price)
        return data
