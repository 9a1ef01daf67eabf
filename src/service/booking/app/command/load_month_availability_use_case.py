from typing import Callable, Dict, List, Optional

import anyio

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_booking_gateway import IBookingGateway
from src.service.booking.domain.availability_cache import AvailabilityCache, iter_month_days
from src.service.booking.domain.enum.date_availability_status import DateAvailabilityStatus


class LoadMonthAvailabilityUseCase:
    """
    Prefetch calendar availability for one ticket type and month

    Flow:
    1. Mark every day missing from the cache as LOADING (no await before this)
    2. Probe each marked day concurrently through get_time_slots
    3. Wait for every probe to settle, then write all results at once

    Probe outcome:
    - AVAILABLE: at least one slot with available_slots > 0
    - UNAVAILABLE: empty list, all slots full, or any gateway error

    Dependencies:
    - gateway: Museum API port (get_time_slots)
    - cache: Shared AvailabilityCache owned by the booking session
    """

    def __init__(
        self,
        *,
        gateway: IBookingGateway,
        cache: AvailabilityCache,
        max_concurrent_probes: int = 31,
    ) -> None:
        self.gateway = gateway
        self.cache = cache
        self.max_concurrent_probes = max_concurrent_probes
        self._limiter: Optional[anyio.CapacityLimiter] = None
        self._loads_in_flight = 0

    @property
    def is_loading(self) -> bool:
        return self._loads_in_flight > 0

    @Logger.io
    async def load_month(
        self,
        *,
        ticket_type_id: str,
        year: int,
        month: int,
        on_change: Optional[Callable[[], None]] = None,
    ) -> int:
        """
        Returns:
            Number of probes issued (0 when the whole month is already
            loading or resolved)
        """
        iso_dates = [day.isoformat() for day in iter_month_days(year, month)]
        pending = self.cache.mark_loading(ticket_type_id, iso_dates)
        if not pending:
            return 0

        generation = self.cache.generation
        results: Dict[str, DateAvailabilityStatus] = {}
        try:
            self._loads_in_flight += 1
            if on_change:
                on_change()
            async with anyio.create_task_group() as tg:
                for iso_date in pending:
                    tg.start_soon(self._probe, ticket_type_id, iso_date, results)
        finally:
            self._loads_in_flight -= 1
            self._settle(ticket_type_id, pending, results, generation)
            if on_change:
                on_change()

        available = sum(
            1 for status in results.values() if status is DateAvailabilityStatus.AVAILABLE
        )
        Logger.base.info(
            f'📅 [AVAILABILITY] {ticket_type_id} {year}-{month:02d}: '
            f'{available}/{len(pending)} probed days bookable'
        )
        return len(pending)

    def _settle(
        self,
        ticket_type_id: str,
        pending: List[str],
        results: Dict[str, DateAvailabilityStatus],
        generation: int,
    ) -> None:
        if len(results) < len(pending):
            # Cancelled before every probe reported back
            self.cache.release(ticket_type_id, pending, generation=generation)
            return
        if not self.cache.resolve(ticket_type_id, results, generation=generation):
            Logger.base.debug(
                f'[AVAILABILITY] Dropped stale results for {ticket_type_id} (cache was reset)'
            )

    async def _probe(
        self,
        ticket_type_id: str,
        iso_date: str,
        results: Dict[str, DateAvailabilityStatus],
    ) -> None:
        if self._limiter is None:
            self._limiter = anyio.CapacityLimiter(self.max_concurrent_probes)

        async with self._limiter:
            try:
                time_slots = await self.gateway.get_time_slots(
                    ticket_type_id=ticket_type_id, iso_date=iso_date
                )
                bookable = any(slot.has_availability for slot in time_slots or [])
            except Exception as e:
                # Includes NotFoundError: "no slots" reads as not bookable
                Logger.base.debug(f'[AVAILABILITY] {ticket_type_id}@{iso_date} unavailable: {e}')
                bookable = False

        results[iso_date] = (
            DateAvailabilityStatus.AVAILABLE if bookable else DateAvailabilityStatus.UNAVAILABLE
        )
