"""Booking application interfaces"""

from src.service.booking.app.interface.i_booking_gateway import IBookingGateway

__all__ = ['IBookingGateway']
