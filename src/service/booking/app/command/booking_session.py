from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple

import attrs

from src.platform.exception.exceptions import (
    BookingValidationError,
    CustomBaseError,
    DomainError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.service.booking.app.command.load_month_availability_use_case import (
    LoadMonthAvailabilityUseCase,
)
from src.service.booking.app.dto.create_booking_payload import CreateBookingPayload
from src.service.booking.app.interface.i_booking_gateway import IBookingGateway
from src.service.booking.domain.availability_cache import AvailabilityCache
from src.service.booking.domain.booking_summary import (
    BookingSummary,
    build_booking_summary,
    compute_total_price,
    compute_total_tickets,
)
from src.service.booking.domain.booking_validator import (
    capacity_error,
    sanitize_input,
    validate_selection,
)
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.ticket_type_entity import TicketType
from src.service.booking.domain.entity.time_slot_entity import TimeSlot
from src.service.booking.domain.enum.date_availability_status import DateAvailabilityStatus
from src.service.booking.domain.selection_state import SelectionState
from src.service.booking.domain.value_object.customer_info import CustomerInfo
from src.service.booking.domain.value_object.selected_ticket import SelectedTicket
from src.service.booking.domain.value_object.validation_errors import ValidationErrors


TICKET_TYPES_ERROR = 'Unable to load ticket types. Please try again.'
TIME_SLOTS_ERROR = 'Unable to load available time slots. Please try again.'
CREATE_BOOKING_ERROR = 'Failed to create booking. Please try again.'

SummaryListener = Callable[[BookingSummary], None]


class BookingSession:
    """
    One visitor's booking flow: ticket -> date -> time slot -> contact details

    The only writer of SelectionState and the AvailabilityCache. After every
    call:
    - a selected time slot implies a selected date and ticket
    - a time slot too small for the ticket quantity carries a capacity error
    - no LOADING cache entry exists without its probe in flight
    - a ticket type change has dropped date, time slot and loaded slots

    Derived values are pushed to subscribers after each mutation.
    """

    def __init__(
        self,
        *,
        gateway: IBookingGateway,
        booking_source: str = 'ONLINE',
        max_concurrent_probes: int = 31,
    ) -> None:
        self.gateway = gateway
        self.booking_source = booking_source
        self._selection = SelectionState()
        self._cache = AvailabilityCache()
        self._availability_loader = LoadMonthAvailabilityUseCase(
            gateway=gateway,
            cache=self._cache,
            max_concurrent_probes=max_concurrent_probes,
        )
        self._ticket_types: Tuple[TicketType, ...] = ()
        self._time_slots: Tuple[TimeSlot, ...] = ()
        self._validation_errors = ValidationErrors()
        self._booking_error: Optional[str] = None
        self._ticket_type_loads = 0
        self._time_slot_loads = 0
        self._time_slot_request = 0
        self._is_creating_booking = False
        self._listeners: List[SummaryListener] = []

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def selected_ticket(self) -> Optional[SelectedTicket]:
        return self._selection.ticket

    @property
    def selected_date(self) -> Optional[date]:
        return self._selection.visit_date

    @property
    def selected_time_slot(self) -> Optional[TimeSlot]:
        return self._selection.time_slot

    @property
    def customer_info(self) -> CustomerInfo:
        return self._selection.customer

    @property
    def ticket_types(self) -> Tuple[TicketType, ...]:
        return self._ticket_types

    @property
    def time_slots(self) -> Tuple[TimeSlot, ...]:
        return self._time_slots

    @property
    def validation_errors(self) -> ValidationErrors:
        return self._validation_errors

    @property
    def booking_error(self) -> Optional[str]:
        return self._booking_error

    @property
    def is_loading_ticket_types(self) -> bool:
        return self._ticket_type_loads > 0

    @property
    def is_loading_time_slots(self) -> bool:
        return self._time_slot_loads > 0

    @property
    def is_loading_availability(self) -> bool:
        return self._availability_loader.is_loading

    @property
    def is_creating_booking(self) -> bool:
        return self._is_creating_booking

    @property
    def total_price(self) -> Decimal:
        return compute_total_price(self._selection, self._ticket_types)

    @property
    def total_tickets(self) -> int:
        return compute_total_tickets(self._selection)

    @property
    def summary(self) -> BookingSummary:
        return build_booking_summary(self._selection, self._ticket_types)

    @property
    def availability_cache_size(self) -> int:
        return len(self._cache)

    def availability_status(self, ticket_type_id: str, day: date) -> DateAvailabilityStatus:
        return self._cache.status(ticket_type_id, day.isoformat())

    def availability_for_month(
        self, ticket_type_id: str, year: int, month: int
    ) -> Dict[date, DateAvailabilityStatus]:
        return self._cache.month_view(ticket_type_id, year, month)

    def availability_for_ticket_type(
        self, ticket_type_id: str
    ) -> Dict[date, DateAvailabilityStatus]:
        """Every requested date of one ticket type, loading ones included."""
        return {
            date.fromisoformat(iso_date): status
            for iso_date, status in self._cache.for_ticket_type(ticket_type_id).items()
        }

    @property
    def pending_availability_probes(self) -> int:
        return self._cache.count_loading()

    def subscribe(self, listener: SummaryListener) -> Callable[[], None]:
        """
        Register a listener called with the fresh summary after each change.

        The listener is called once immediately. Returns an unsubscribe callable.
        """
        self._listeners.append(listener)
        listener(self.summary)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        summary = self.summary
        for listener in list(self._listeners):
            try:
                listener(summary)
            except Exception:
                Logger.base.exception(f'[BOOKING] Summary listener {listener!r} failed')

    # ------------------------------------------------------------------
    # Catalogue
    # ------------------------------------------------------------------

    @Logger.io
    async def load_ticket_types(self) -> None:
        """Replace the ticket catalogue; failures land in booking_error."""
        self._ticket_type_loads += 1
        self._booking_error = None
        self._notify()
        try:
            ticket_types = await self.gateway.get_ticket_types()
        except CustomBaseError as e:
            Logger.base.warning(f'[BOOKING] Failed to load ticket types: {e}')
            self._booking_error = TICKET_TYPES_ERROR
        else:
            self._ticket_types = tuple(ticket_types)
        finally:
            self._ticket_type_loads -= 1
            self._notify()

    async def ensure_ticket_types_loaded(self) -> None:
        if not self._ticket_types:
            await self.load_ticket_types()

    # ------------------------------------------------------------------
    # Selection setters
    # ------------------------------------------------------------------

    @Logger.io
    def set_ticket(self, ticket_type_id: str, quantity: int) -> None:
        """
        Select `quantity` tickets of one type, replacing any other selection.

        quantity <= 0 clears the selection. Switching to another ticket type
        (or clearing) drops date, time slot and the loaded slots; the
        availability cache is kept per ticket type.
        """
        previous = self._selection.ticket
        if quantity > 0:
            self._selection.ticket = SelectedTicket(
                ticket_type_id=ticket_type_id, quantity=quantity
            )
        else:
            self._selection.ticket = None

        previous_id = previous.ticket_type_id if previous else None
        current_id = self._selection.ticket.ticket_type_id if self._selection.ticket else None
        if current_id != previous_id:
            self._clear_date_and_below()

        self._validation_errors = self._validation_errors.without('tickets', 'capacity')
        self._refresh_capacity_error()
        self._notify()

    @Logger.io
    def set_date(self, visit_date: Optional[date]) -> None:
        """Select the visit date; any time slot choice is dropped (slots are per date)."""
        if isinstance(visit_date, datetime):
            visit_date = visit_date.date()
        if visit_date is not None and self._selection.ticket is None:
            Logger.base.warning('[BOOKING] Ignoring date selection: no ticket selected')
            return

        self._clear_date_and_below()
        self._selection.visit_date = visit_date
        self._validation_errors = self._validation_errors.without('date')
        self._refresh_capacity_error()
        self._notify()

    @Logger.io
    def set_time_slot(self, time_slot: Optional[TimeSlot]) -> None:
        if time_slot is not None and (
            self._selection.ticket is None or self._selection.visit_date is None
        ):
            Logger.base.warning('[BOOKING] Ignoring time slot selection: ticket and date required')
            return

        self._selection.time_slot = time_slot
        self._validation_errors = self._validation_errors.without('time_slot', 'capacity')
        self._refresh_capacity_error()
        self._notify()

    @Logger.io
    def set_customer_info(self, **changes: Any) -> None:
        """Merge name / email / is_guest; checked again only on submit."""
        self._selection.customer = attrs.evolve(self._selection.customer, **changes)
        self._validation_errors = self._validation_errors.without('name', 'email')
        self._notify()

    def _clear_date_and_below(self) -> None:
        self._selection.visit_date = None
        self._selection.time_slot = None
        self._time_slots = ()

    def _refresh_capacity_error(self) -> None:
        self._validation_errors = self._validation_errors.with_error(
            'capacity', capacity_error(self._selection)
        )

    # ------------------------------------------------------------------
    # Time slots and calendar availability
    # ------------------------------------------------------------------

    @Logger.io
    async def load_time_slots_for_selection(self) -> None:
        """
        Fetch time slots for the selected (ticket, date)

        - Missing ticket or date: empties the slot list
        - Selected slot absent from the result: deselected
        - Selection changed while waiting: result discarded
        - Gateway failure: booking_error set, slot list emptied
        """
        ticket = self._selection.ticket
        visit_date = self._selection.visit_date
        if ticket is None or visit_date is None:
            self._time_slots = ()
            self._notify()
            return

        self._time_slot_request += 1
        request_id = self._time_slot_request
        self._time_slot_loads += 1
        self._booking_error = None
        self._notify()

        try:
            time_slots = await self.gateway.get_time_slots(
                ticket_type_id=ticket.ticket_type_id, iso_date=visit_date.isoformat()
            )
        except NotFoundError:
            time_slots = []
        except CustomBaseError as e:
            if self._is_current_time_slot_request(request_id, ticket.ticket_type_id, visit_date):
                Logger.base.warning(f'[BOOKING] Failed to load time slots: {e}')
                self._booking_error = TIME_SLOTS_ERROR
                self._time_slots = ()
            return
        finally:
            self._time_slot_loads -= 1
            self._notify()

        if not self._is_current_time_slot_request(request_id, ticket.ticket_type_id, visit_date):
            Logger.base.debug(
                f'[BOOKING] Discarded time slots for {ticket.ticket_type_id}@{visit_date}: '
                'selection changed'
            )
            return

        self._time_slots = tuple(time_slots)
        current_slot = self._selection.time_slot
        if current_slot is not None:
            # Keep the selection on its freshest copy; drop it if it vanished
            self._selection.time_slot = next(
                (slot for slot in time_slots if slot.id == current_slot.id), None
            )
        self._refresh_capacity_error()
        self._notify()

    def _is_current_time_slot_request(
        self, request_id: int, ticket_type_id: str, visit_date: date
    ) -> bool:
        ticket = self._selection.ticket
        return (
            request_id == self._time_slot_request
            and ticket is not None
            and ticket.ticket_type_id == ticket_type_id
            and self._selection.visit_date == visit_date
        )

    async def load_month_availability(self, ticket_type_id: str, year: int, month: int) -> int:
        """Prefetch calendar availability; never raises for lookup failures."""
        return await self._availability_loader.load_month(
            ticket_type_id=ticket_type_id,
            year=year,
            month=month,
            on_change=self._notify,
        )

    # ------------------------------------------------------------------
    # Validation and submit
    # ------------------------------------------------------------------

    @Logger.io
    def validate_booking(self) -> bool:
        """Run every rule together and replace the error map."""
        self._validation_errors = validate_selection(self._selection)
        self._notify()
        return self._validation_errors.is_empty

    def build_payload(self) -> CreateBookingPayload:
        ticket = self._selection.ticket
        visit_date = self._selection.visit_date
        time_slot = self._selection.time_slot
        if ticket is None or visit_date is None or time_slot is None:
            raise BookingValidationError('Booking selection is incomplete')

        customer = self._selection.customer
        return CreateBookingPayload(
            booking_date=visit_date.isoformat(),
            time_slot_id=time_slot.id,
            ticket_type_id=ticket.ticket_type_id,
            quantity=ticket.quantity,
            total_price=self.total_price,
            source=self.booking_source,
            customer_name=sanitize_input(customer.name) if customer.is_guest else None,
            customer_email=customer.email.strip() if customer.is_guest else None,
        )

    @Logger.io
    async def create_booking(self) -> Booking:
        """
        Submit the booking

        Raises:
            BookingValidationError: Local validation failed (see validation_errors)
            DomainError: A submit is already in flight
            CustomBaseError: Gateway rejected the booking; state kept for retry
        """
        if self._is_creating_booking:
            raise DomainError('A booking is already being created', 409)
        if not self.validate_booking():
            raise BookingValidationError()

        payload = self.build_payload()
        self._is_creating_booking = True
        self._booking_error = None
        self._notify()
        try:
            booking = await self.gateway.create_booking(payload=payload)
        except Exception:
            self._booking_error = CREATE_BOOKING_ERROR
            raise
        finally:
            self._is_creating_booking = False
            self._notify()

        Logger.base.info(
            f'🎟️ [BOOKING] Created booking {booking.id} '
            f'({payload.quantity}x {payload.ticket_type_id} on {payload.booking_date})'
        )
        self.reset_booking()
        return booking

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    @Logger.io
    def reset_booking(self) -> None:
        """Wipe selection, loaded slots, availability cache and every error."""
        self._selection = SelectionState()
        self._time_slots = ()
        self._time_slot_request += 1
        self._cache.clear()
        self._validation_errors = ValidationErrors()
        self._booking_error = None
        self._notify()

    def clear_errors(self) -> None:
        self._booking_error = None
        self._validation_errors = ValidationErrors()
        self._refresh_capacity_error()
        self._notify()
