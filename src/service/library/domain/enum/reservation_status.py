"""Reservation Status Enum"""

from enum import StrEnum


class ReservationStatus(StrEnum):
    PENDING = 'PENDING'
    APPROVED = 'APPROVED'
    DENIED = 'DENIED'
    WAITLISTED = 'WAITLISTED'
