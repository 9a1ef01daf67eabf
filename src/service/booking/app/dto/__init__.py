"""Application layer DTOs"""

from src.service.booking.app.dto.create_booking_payload import CreateBookingPayload

__all__ = ['CreateBookingPayload']
