import attrs


def _positive_quantity(instance: 'SelectedTicket', attribute: attrs.Attribute, value: int) -> None:
    if value < 1:
        raise ValueError('Selected ticket quantity must be at least 1')


@attrs.define(frozen=True)
class SelectedTicket:
    ticket_type_id: str
    quantity: int = attrs.field(validator=_positive_quantity)
