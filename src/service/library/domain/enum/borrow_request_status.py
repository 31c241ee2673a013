"""Borrow Request Status Enum"""

from enum import StrEnum


class BorrowRequestStatus(StrEnum):
    PENDING = 'PENDING'
    APPROVED = 'APPROVED'
    DENIED = 'DENIED'
