from typing import Dict, Optional

import attrs


@attrs.define(frozen=True)
class ValidationErrors:
    """
    Field-scoped validation messages

    Sparse: a field holding a message is an active error, None means no error.
    """

    date: Optional[str] = None
    time_slot: Optional[str] = None
    tickets: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    capacity: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.as_dict()

    def as_dict(self) -> Dict[str, str]:
        return {key: value for key, value in attrs.asdict(self).items() if value is not None}

    def without(self, *fields: str) -> 'ValidationErrors':
        return attrs.evolve(self, **{field: None for field in fields})

    def with_error(self, field: str, message: Optional[str]) -> 'ValidationErrors':
        return attrs.evolve(self, **{field: message})
