"""
Derived booking values

Pure functions over SelectionState and the loaded ticket catalogue.
BookingSession recomputes them after every mutation and pushes the
resulting BookingSummary to its listeners.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

import attrs

from src.service.booking.domain.entity.ticket_type_entity import TicketType
from src.service.booking.domain.entity.time_slot_entity import TimeSlot
from src.service.booking.domain.selection_state import SelectionState


@attrs.define(frozen=True)
class TicketLine:
    ticket_type: TicketType
    quantity: int
    subtotal: Decimal


@attrs.define(frozen=True)
class BookingSummary:
    visit_date: Optional[date]
    time_slot: Optional[TimeSlot]
    ticket_line: Optional[TicketLine]
    total_price: Decimal
    total_tickets: int
    is_complete: bool


def find_ticket_type(
    ticket_types: Sequence[TicketType], ticket_type_id: str
) -> Optional[TicketType]:
    return next((item for item in ticket_types if item.id == ticket_type_id), None)


def compute_total_tickets(selection: SelectionState) -> int:
    return selection.ticket.quantity if selection.ticket else 0


def compute_total_price(selection: SelectionState, ticket_types: Sequence[TicketType]) -> Decimal:
    # A ticket id missing from the catalogue (e.g. mid-reload) counts as zero
    if selection.ticket is None:
        return Decimal(0)
    ticket_type = find_ticket_type(ticket_types, selection.ticket.ticket_type_id)
    if ticket_type is None:
        return Decimal(0)
    return ticket_type.price * selection.ticket.quantity


def build_ticket_line(
    selection: SelectionState, ticket_types: Sequence[TicketType]
) -> Optional[TicketLine]:
    if selection.ticket is None:
        return None
    ticket_type = find_ticket_type(ticket_types, selection.ticket.ticket_type_id)
    if ticket_type is None:
        return None
    return TicketLine(
        ticket_type=ticket_type,
        quantity=selection.ticket.quantity,
        subtotal=ticket_type.price * selection.ticket.quantity,
    )


def build_booking_summary(
    selection: SelectionState, ticket_types: Sequence[TicketType]
) -> BookingSummary:
    total_tickets = compute_total_tickets(selection)
    return BookingSummary(
        visit_date=selection.visit_date,
        time_slot=selection.time_slot,
        ticket_line=build_ticket_line(selection, ticket_types),
        total_price=compute_total_price(selection, ticket_types),
        total_tickets=total_tickets,
        is_complete=(
            selection.visit_date is not None
            and selection.time_slot is not None
            and total_tickets > 0
            and selection.customer.has_contact_details
        ),
    )
