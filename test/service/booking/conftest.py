"""
Booking test fixtures

Gateways are AsyncMocks by default. BlockingGateway holds chosen
get_time_slots calls until released, for in-flight / race scenarios.
"""

from datetime import date
from decimal import Decimal
from typing import Callable, List, Optional, Set, Tuple
from unittest.mock import AsyncMock

import anyio
import pytest

from src.platform.exception.exceptions import NotFoundError
from src.service.booking.app.command.booking_session import BookingSession
from src.service.booking.app.dto.create_booking_payload import CreateBookingPayload
from src.service.booking.app.interface.i_booking_gateway import IBookingGateway
from src.service.booking.domain.entity.booking_entity import Booking
from src.service.booking.domain.entity.ticket_type_entity import TicketType
from src.service.booking.domain.entity.time_slot_entity import TimeSlot


class BlockingGateway(IBookingGateway):
    """
    In-memory gateway whose get_time_slots waits for `release` on chosen dates

    Must be created inside a running event loop (anyio.Event).
    """

    def __init__(
        self,
        *,
        slots: Optional[List[TimeSlot]] = None,
        blocked_dates: Optional[Set[str]] = None,
        block_all: bool = False,
    ) -> None:
        self.slots = slots if slots is not None else []
        self.blocked_dates = blocked_dates or set()
        self.block_all = block_all
        self.release = anyio.Event()
        self.calls: List[Tuple[str, str]] = []

    async def get_ticket_types(self) -> List[TicketType]:
        return []

    async def get_time_slots(self, *, ticket_type_id: str, iso_date: str) -> List[TimeSlot]:
        self.calls.append((ticket_type_id, iso_date))
        if self.block_all or iso_date in self.blocked_dates:
            await self.release.wait()
        return list(self.slots)

    async def create_booking(self, *, payload: CreateBookingPayload) -> Booking:
        raise NotImplementedError


@pytest.fixture
def adult_ticket() -> TicketType:
    return TicketType(id='adult', price=Decimal('8'), name={'en': 'Adult', 'it': 'Adulto'})


@pytest.fixture
def child_ticket() -> TicketType:
    return TicketType(id='child', price=Decimal('4.50'), name={'en': 'Child', 'it': 'Bambino'})


@pytest.fixture
def family_ticket() -> TicketType:
    return TicketType(
        id='family', price=Decimal('20'), name={'it': 'Famiglia'}, group_size=4
    )


@pytest.fixture
def ticket_types(
    adult_ticket: TicketType, child_ticket: TicketType, family_ticket: TicketType
) -> List[TicketType]:
    return [adult_ticket, child_ticket, family_ticket]


@pytest.fixture
def slot_factory() -> Callable[..., TimeSlot]:
    def _make(
        slot_id: str = 'slot-10',
        available: int = 5,
        capacity: int = 10,
        start_time: str = '10:00:00',
        end_time: str = '11:00:00',
    ) -> TimeSlot:
        return TimeSlot(
            id=slot_id,
            start_time=start_time,
            end_time=end_time,
            available_slots=available,
            capacity=capacity,
        )

    return _make


@pytest.fixture
def booking_factory() -> Callable[[CreateBookingPayload], Booking]:
    def _make(payload: CreateBookingPayload) -> Booking:
        return Booking(
            id='booking-1',
            booking_date=date.fromisoformat(payload.booking_date),
            time_slot_id=payload.time_slot_id,
            ticket_type_id=payload.ticket_type_id,
            quantity=payload.quantity,
            total_price=payload.total_price,
            source=payload.source,
            customer_name=payload.customer_name,
            customer_email=payload.customer_email,
        )

    return _make


@pytest.fixture
def mock_gateway(ticket_types: List[TicketType]) -> AsyncMock:
    """Gateway mock: catalogue loaded, no time slots anywhere"""
    gateway = AsyncMock(spec=IBookingGateway)
    gateway.get_ticket_types = AsyncMock(return_value=ticket_types)
    gateway.get_time_slots = AsyncMock(side_effect=NotFoundError('No time slots found'))
    gateway.create_booking = AsyncMock()
    return gateway


@pytest.fixture
def booking_session(mock_gateway: AsyncMock) -> BookingSession:
    return BookingSession(gateway=mock_gateway, booking_source='ONLINE')



@pytest.fixture
def blocking_gateway_cls() -> type[BlockingGateway]:
    return BlockingGateway
