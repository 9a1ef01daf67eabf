from decimal import Decimal
from typing import Dict, Optional

import attrs

from src.platform.config.core_setting import settings


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so 8.1 becomes Decimal('8.1'), not its binary expansion
    return Decimal(str(value))


def _non_negative_price(instance: 'TicketType', attribute: attrs.Attribute, value: Decimal) -> None:
    if value < 0:
        raise ValueError('Ticket price cannot be negative')


def _positive_group_size(
    instance: 'TicketType', attribute: attrs.Attribute, value: Optional[int]
) -> None:
    if value is not None and value < 1:
        raise ValueError('Group size must be at least 1')


@attrs.define(frozen=True)
class TicketType:
    """A purchasable admission category (adult, child, family...)."""

    id: str
    price: Decimal = attrs.field(converter=_to_decimal, validator=_non_negative_price)
    name: Dict[str, str] = attrs.field(factory=dict, eq=False)
    group_size: Optional[int] = attrs.field(default=None, validator=_positive_group_size)

    def display_name(self, locale: Optional[str] = None) -> str:
        """
        Localized name with fallback

        Order: requested locale -> base locale -> first translation -> id
        """
        for candidate in (locale, settings.BASE_LOCALE):
            if candidate and self.name.get(candidate):
                return self.name[candidate]
        for translation in self.name.values():
            if translation:
                return translation
        return self.id
