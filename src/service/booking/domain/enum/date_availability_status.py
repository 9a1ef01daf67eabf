"""
Date Availability Status Enum - Domain Value Object

Per-date bookability shown on the visit calendar.
"""

from enum import StrEnum


class DateAvailabilityStatus(StrEnum):
    """Availability of one visit date for one ticket type"""

    AVAILABLE = 'available'
    UNAVAILABLE = 'unavailable'
    LOADING = 'loading'  # Probe in flight
    UNKNOWN = 'unknown'  # Never requested

    @property
    def is_resolved(self) -> bool:
        return self in (DateAvailabilityStatus.AVAILABLE, DateAvailabilityStatus.UNAVAILABLE)
