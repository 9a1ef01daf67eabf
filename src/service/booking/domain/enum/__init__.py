"""Booking Domain Enums"""

from src.service.booking.domain.enum.booking_status import BookingStatus
from src.service.booking.domain.enum.date_availability_status import DateAvailabilityStatus

__all__ = ['BookingStatus', 'DateAvailabilityStatus']
