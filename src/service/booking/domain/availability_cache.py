"""
Availability Cache - per (ticket type, date) bookability

Entries move unknown -> loading -> available|unavailable and are never
probed again once resolved. A `loading` entry doubles as the in-flight
marker, so overlapping month loads coalesce on the cache itself.

Keys are flat `(ticket_type_id, iso_date)` tuples. Every full clear bumps
`generation`; writes carrying an older generation are dropped, so a probe
that outlives a reset cannot repopulate the cache.
"""

import calendar
from datetime import date
from typing import Dict, Iterable, List, Mapping, Tuple

from src.service.booking.domain.enum.date_availability_status import DateAvailabilityStatus


CacheKey = Tuple[str, str]


def iter_month_days(year: int, month: int) -> List[date]:
    _, days_in_month = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, days_in_month + 1)]


class AvailabilityCache:
    def __init__(self) -> None:
        self._entries: Dict[CacheKey, DateAvailabilityStatus] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def status(self, ticket_type_id: str, iso_date: str) -> DateAvailabilityStatus:
        return self._entries.get((ticket_type_id, iso_date), DateAvailabilityStatus.UNKNOWN)

    def for_ticket_type(self, ticket_type_id: str) -> Dict[str, DateAvailabilityStatus]:
        return {
            iso_date: status
            for (entry_ticket_id, iso_date), status in self._entries.items()
            if entry_ticket_id == ticket_type_id
        }

    def month_view(
        self, ticket_type_id: str, year: int, month: int
    ) -> Dict[date, DateAvailabilityStatus]:
        return {
            day: self.status(ticket_type_id, day.isoformat())
            for day in iter_month_days(year, month)
        }

    def count_loading(self) -> int:
        return sum(
            1 for status in self._entries.values() if status is DateAvailabilityStatus.LOADING
        )

    def mark_loading(self, ticket_type_id: str, iso_dates: Iterable[str]) -> List[str]:
        """
        Mark every date not yet in the cache as loading

        Returns:
            The dates that were marked, i.e. the ones the caller must probe.
            Dates already loading or resolved are skipped.
        """
        marked: List[str] = []
        for iso_date in iso_dates:
            key = (ticket_type_id, iso_date)
            if key in self._entries:
                continue
            self._entries[key] = DateAvailabilityStatus.LOADING
            marked.append(iso_date)
        return marked

    def resolve(
        self,
        ticket_type_id: str,
        results: Mapping[str, DateAvailabilityStatus],
        *,
        generation: int,
    ) -> bool:
        """Write probe results; returns False when they belong to a cleared generation."""
        if generation != self._generation:
            return False
        for iso_date, status in results.items():
            if not status.is_resolved:
                raise ValueError(f'Cannot resolve {iso_date} to {status}')
            key = (ticket_type_id, iso_date)
            if self._entries.get(key) is DateAvailabilityStatus.LOADING:
                self._entries[key] = status
        return True

    def release(self, ticket_type_id: str, iso_dates: Iterable[str], *, generation: int) -> None:
        """Drop loading markers whose probes will never report back."""
        if generation != self._generation:
            return
        for iso_date in iso_dates:
            key = (ticket_type_id, iso_date)
            if self._entries.get(key) is DateAvailabilityStatus.LOADING:
                del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()
        self._generation += 1
