import attrs


@attrs.define(frozen=True)
class CustomerInfo:
    """Contact details; only collected from guests (signed-in visitors have an account)."""

    name: str = ''
    email: str = ''
    is_guest: bool = True

    @property
    def has_contact_details(self) -> bool:
        if not self.is_guest:
            return True
        return bool(self.name.strip()) and bool(self.email.strip())
