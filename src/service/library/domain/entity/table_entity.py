from typing import FrozenSet, Optional

import attrs


@attrs.define(frozen=True)
class Table:
    """Study table with a fixed set of numbered seats. Read-only in this service."""

    label: str
    seats: FrozenSet[int] = attrs.field(converter=frozenset)
    id: Optional[int] = None

    def has_seat(self, seat_number: int) -> bool:
        return seat_number in self.seats

    @property
    def sorted_seats(self) -> list[int]:
        return sorted(self.seats)
