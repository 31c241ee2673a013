"""Book Availability Status Enum"""

from enum import StrEnum


class AvailabilityStatus(StrEnum):
    AVAILABLE = 'AVAILABLE'
    BORROWED = 'BORROWED'
    RESERVED = 'RESERVED'
    MAINTENANCE = 'MAINTENANCE'
