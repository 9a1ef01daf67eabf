"""
Booking validation rules

validate_selection runs every rule at once (submit time). Setters only
re-derive the capacity rule through capacity_error.
"""

import re
from typing import Optional

from src.service.booking.domain.booking_summary import compute_total_tickets
from src.service.booking.domain.selection_state import SelectionState
from src.service.booking.domain.value_object.customer_info import CustomerInfo
from src.service.booking.domain.value_object.validation_errors import ValidationErrors


MIN_NAME_LENGTH = 2
MAX_INPUT_LENGTH = 500

_MARKUP_CHARS = re.compile(r'[<>]')
_JAVASCRIPT_PROTOCOL = re.compile(r'javascript:', re.IGNORECASE)


def sanitize_input(value: str) -> str:
    """Trim, drop markup brackets and `javascript:`, cap the length."""
    cleaned = _MARKUP_CHARS.sub('', value.strip())
    cleaned = _JAVASCRIPT_PROTOCOL.sub('', cleaned)
    return cleaned[:MAX_INPUT_LENGTH]


def is_valid_name(name: str) -> bool:
    return len(name.strip()) >= MIN_NAME_LENGTH


def is_valid_email(email: str) -> bool:
    return '@' in email


def capacity_error(selection: SelectionState) -> Optional[str]:
    slot = selection.time_slot
    quantity = compute_total_tickets(selection)
    if slot is None or quantity == 0 or slot.can_fit(quantity):
        return None
    return f'Only {slot.available_slots} tickets available for this time slot'


def validate_customer(customer: CustomerInfo) -> ValidationErrors:
    errors = ValidationErrors()
    if not customer.is_guest:
        return errors
    if not is_valid_name(customer.name):
        errors = errors.with_error('name', 'Please enter a valid name')
    if not is_valid_email(customer.email):
        errors = errors.with_error('email', 'Please enter a valid email address')
    return errors


def validate_selection(selection: SelectionState) -> ValidationErrors:
    errors = validate_customer(selection.customer)
    if selection.visit_date is None:
        errors = errors.with_error('date', 'Please select a visit date')
    if selection.time_slot is None:
        errors = errors.with_error('time_slot', 'Please select a time slot')
    if compute_total_tickets(selection) == 0:
        errors = errors.with_error('tickets', 'Please select at least one ticket')
    return errors.with_error('capacity', capacity_error(selection))
