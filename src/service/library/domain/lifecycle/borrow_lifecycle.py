"""
Borrow request lifecycle

    PENDING ──► APPROVED   (book becomes BORROWED)
        │
        └─────► DENIED     (book untouched)
"""

from typing import assert_never

from src.platform.exception.exceptions import InvalidStateError, InvalidStatusError
from src.service.library.domain.enum.borrow_request_status import BorrowRequestStatus


DECISION_STATUSES: frozenset[BorrowRequestStatus] = frozenset(
    {BorrowRequestStatus.APPROVED, BorrowRequestStatus.DENIED}
)


class BorrowLifecycle:
    @staticmethod
    def parse_target(raw_status: str | BorrowRequestStatus) -> BorrowRequestStatus:
        try:
            target = BorrowRequestStatus(raw_status)
        except ValueError:
            raise InvalidStatusError(f'Invalid status: {raw_status}')
        if target not in DECISION_STATUSES:
            raise InvalidStatusError(
                f'Invalid status: {raw_status}. Expected one of '
                f'{", ".join(sorted(DECISION_STATUSES))}'
            )
        return target

    @staticmethod
    def is_terminal(status: BorrowRequestStatus) -> bool:
        match status:
            case BorrowRequestStatus.PENDING:
                return False
            case BorrowRequestStatus.APPROVED | BorrowRequestStatus.DENIED:
                return True
            case _:
                assert_never(status)

    @classmethod
    def transition(
        cls, current: BorrowRequestStatus, target: str | BorrowRequestStatus
    ) -> BorrowRequestStatus:
        target_status = cls.parse_target(target)
        if cls.is_terminal(current):
            raise InvalidStateError(
                f'Borrow request already {current}; only PENDING can be decided'
            )
        return target_status
