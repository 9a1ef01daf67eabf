"""
Selection State - the visitor's current choices

Plain data. Only BookingSession writes to it, so the layering rules
(time slot needs a date, date needs a ticket) are enforced there.
"""

from datetime import date
from typing import Optional

import attrs

from src.service.booking.domain.entity.time_slot_entity import TimeSlot
from src.service.booking.domain.value_object.customer_info import CustomerInfo
from src.service.booking.domain.value_object.selected_ticket import SelectedTicket


@attrs.define
class SelectionState:
    ticket: Optional[SelectedTicket] = None
    visit_date: Optional[date] = None
    time_slot: Optional[TimeSlot] = None
    customer: CustomerInfo = attrs.field(factory=CustomerInfo)
