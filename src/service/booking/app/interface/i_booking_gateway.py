"""
Booking Gateway Interface

Port to the museum API. Implementations raise the platform gateway errors:
NotFoundError when no time slots exist for a (ticket type, date) pair,
GatewayValidationError / ServerError when booking creation is rejected.
"""

from abc import ABC, abstractmethod
from typing import List

from src.service.booking.app.dto.create_booking_payload import CreateBookingPayload
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.ticket_type_entity import TicketType
from src.service.booking.domain.entity.time_slot_entity import TimeSlot


class IBookingGateway(ABC):
    @abstractmethod
    async def get_ticket_types(self) -> List[TicketType]:
        pass

    @abstractmethod
    async def get_time_slots(self, *, ticket_type_id: str, iso_date: str) -> List[TimeSlot]:
        """
        Time slots for one ticket type on one date

        Raises:
            NotFoundError: No slots exist for the pair
        """
        pass

    @abstractmethod
    async def create_booking(self, *, payload: CreateBookingPayload) -> Booking:
        pass
