from typing import Optional

import attrs

from src.service.library.domain.enum.availability_status import AvailabilityStatus


@attrs.define
class Book:
    title: str
    author: str
    availability_status: AvailabilityStatus = AvailabilityStatus.AVAILABLE
    id: Optional[int] = None

    @property
    def is_available(self) -> bool:
        return self.availability_status == AvailabilityStatus.AVAILABLE
