"""Booking Domain Value Objects"""

from src.service.booking.domain.value_object.customer_info import CustomerInfo
from src.service.booking.domain.value_object.selected_ticket import SelectedTicket
from src.service.booking.domain.value_object.validation_errors import ValidationErrors

__all__ = ['CustomerInfo', 'SelectedTicket', 'ValidationErrors']
