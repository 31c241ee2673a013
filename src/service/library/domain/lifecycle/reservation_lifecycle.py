"""
Reservation lifecycle

    PENDING ──► APPROVED
        │
        ├─────► DENIED
        │
        └─────► WAITLISTED

Every status but PENDING is terminal. WAITLISTED is an administrator's answer
to a contested slot, never an automatic outcome of admission.
"""

from typing import assert_never

from src.platform.exception.exceptions import InvalidStateError, InvalidStatusError
from src.service.library.domain.enum.reservation_status import ReservationStatus


DECISION_STATUSES: frozenset[ReservationStatus] = frozenset(
    {ReservationStatus.APPROVED, ReservationStatus.DENIED, ReservationStatus.WAITLISTED}
)

BLOCKING_STATUSES: frozenset[ReservationStatus] = frozenset(
    {ReservationStatus.PENDING, ReservationStatus.APPROVED}
)


class ReservationLifecycle:
    @staticmethod
    def parse_target(raw_status: str | ReservationStatus) -> ReservationStatus:
        try:
            target = ReservationStatus(raw_status)
        except ValueError:
            raise InvalidStatusError(f'Invalid status: {raw_status}')
        if target not in DECISION_STATUSES:
            raise InvalidStatusError(
                f'Invalid status: {raw_status}. Expected one of '
                f'{", ".join(sorted(DECISION_STATUSES))}'
            )
        return target

    @staticmethod
    def is_terminal(status: ReservationStatus) -> bool:
        match status:
            case ReservationStatus.PENDING:
                return False
            case ReservationStatus.APPROVED | ReservationStatus.DENIED | ReservationStatus.WAITLISTED:
                return True
            case _:
                assert_never(status)

    @staticmethod
    def is_blocking(status: ReservationStatus) -> bool:
        return status in BLOCKING_STATUSES

    @classmethod
    def transition(
        cls, current: ReservationStatus, target: str | ReservationStatus
    ) -> ReservationStatus:
        """
        Validate a decision on a reservation.

        Raises:
            InvalidStatusError: target is not APPROVED, DENIED or WAITLISTED
            InvalidStateError: reservation already left PENDING
        """
        target_status = cls.parse_target(target)
        if cls.is_terminal(current):
            raise InvalidStateError(f'Reservation already {current}; only PENDING can be decided')
        return target_status
