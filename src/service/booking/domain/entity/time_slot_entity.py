from typing import Optional

import attrs


def _non_negative(instance: 'TimeSlot', attribute: attrs.Attribute, value: int) -> None:
    if value < 0:
        raise ValueError(f'{attribute.name} cannot be negative')


def _capacity_covers_available(
    instance: 'TimeSlot', attribute: attrs.Attribute, value: int
) -> None:
    if value < instance.available_slots:
        raise ValueError('capacity cannot be lower than available_slots')


@attrs.define(frozen=True)
class TimeSlot:
    """Bookable visit window on one date; volatile, refetched per selection."""

    id: str
    start_time: str
    end_time: str
    available_slots: int = attrs.field(validator=_non_negative)
    capacity: int = attrs.field(validator=[_non_negative, _capacity_covers_available])
    ticket_type_id: Optional[str] = None

    @property
    def has_availability(self) -> bool:
        return self.available_slots > 0

    def can_fit(self, quantity: int) -> bool:
        return quantity <= self.available_slots
