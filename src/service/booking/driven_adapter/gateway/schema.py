"""Wire schemas of the museum API (tickets, time slots, bookings)."""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.ticket_type_entity import TicketType
from src.service.booking.domain.entity.time_slot_entity import TimeSlot
from src.service.booking.domain.enum.booking_status import BookingStatus


class TicketTypeSchema(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: str
    name_translations: Dict[str, str] = Field(default_factory=dict)
    description_translations: Optional[Dict[str, str]] = None
    price: Decimal = Field(ge=0)
    group_size: Optional[int] = Field(default=None, ge=1)

    def to_entity(self) -> TicketType:
        return TicketType(
            id=self.id,
            price=self.price,
            name=dict(self.name_translations),
            group_size=self.group_size,
        )


class TimeSlotSchema(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: str
    ticket_type_id: Optional[str] = None
    start_time: str
    end_time: str
    capacity: int = Field(ge=0)
    available_slots: int = Field(ge=0)

    def to_entity(self) -> TimeSlot:
        return TimeSlot(
            id=self.id,
            start_time=self.start_time,
            end_time=self.end_time,
            available_slots=self.available_slots,
            capacity=self.capacity,
            ticket_type_id=self.ticket_type_id,
        )


class BookingSchema(BaseModel):
    model_config = ConfigDict(extra='ignore')

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

    def to_entity(self) -> Booking:
        return Booking(**self.model_dump())
