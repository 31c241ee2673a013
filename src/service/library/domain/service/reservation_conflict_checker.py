"""
Reservation admission.

The check is a pure function of the reservations handed in. Callers must pass
the state read inside the same transaction that will insert the candidate
(see SubmitReservationUseCase), otherwise two concurrent candidates could both
be admitted.
"""

from enum import StrEnum
from typing import Iterable, Optional

import attrs

from src.platform.exception.exceptions import NotFoundError
from src.service.library.domain.entity.reservation_entity import Reservation
from src.service.library.domain.entity.table_entity import Table
from src.service.library.domain.service.reservation_candidate import ReservationCandidate


class AdmissionDecision(StrEnum):
    ALLOW = 'allow'
    REJECT = 'reject'


@attrs.define(frozen=True)
class ConflictCheckResult:
    decision: AdmissionDecision
    conflicts: tuple[Reservation, ...] = ()
    reason: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.decision == AdmissionDecision.ALLOW


class ReservationConflictChecker:
    SLOT_TAKEN_REASON = 'Slot already reserved'

    @staticmethod
    def ensure_seat(*, table: Optional[Table], table_id: int, seat_number: int) -> Table:
        if table is None:
            raise NotFoundError(f'Table {table_id} not found')
        if not table.has_seat(seat_number):
            raise NotFoundError(f'Seat {seat_number} not found at table {table.label}')
        return table

    @classmethod
    def check(
        cls,
        *,
        candidate: ReservationCandidate,
        table: Optional[Table],
        existing: Iterable[Reservation],
    ) -> ConflictCheckResult:
        """
        Decide whether the candidate may be persisted as PENDING.

        Only PENDING/APPROVED reservations on the same table, seat and date
        are considered. The result never asks for waitlisting; conflicts are
        returned so an administrator can choose WAITLISTED over DENIED.

        Raises:
            NotFoundError: table does not resolve, or seat is not one of its seats
        """
        cls.ensure_seat(table=table, table_id=candidate.table_id, seat_number=candidate.seat_number)

        conflicts = tuple(
            reservation
            for reservation in existing
            if reservation.is_blocking
            and reservation.occupies_same_seat_and_day(
                table_id=candidate.table_id,
                seat_number=candidate.seat_number,
                day=candidate.reserved_date,
            )
            and candidate.time_slot.overlaps(reservation.time_slot)
        )
        if conflicts:
            return ConflictCheckResult(
                decision=AdmissionDecision.REJECT,
                conflicts=conflicts,
                reason=cls.SLOT_TAKEN_REASON,
            )
        return ConflictCheckResult(decision=AdmissionDecision.ALLOW)

    @staticmethod
    def find_conflicts(
        reservation: Reservation, existing: Iterable[Reservation]
    ) -> list[Reservation]:
        """Blocking reservations that collide with an already persisted one."""
        return [
            other
            for other in existing
            if other.is_blocking
            and other.id != reservation.id
            and other.occupies_same_seat_and_day(
                table_id=reservation.table_id,
                seat_number=reservation.seat_number,
                day=reservation.reserved_date,
            )
            and other.time_slot.overlaps(reservation.time_slot)
        ]
