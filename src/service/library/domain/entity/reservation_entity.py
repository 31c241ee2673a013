from datetime import date, datetime
from typing import Optional

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.library.domain.enum.reservation_status import ReservationStatus
from src.service.library.domain.lifecycle.reservation_lifecycle import ReservationLifecycle
from src.service.library.domain.value_object.time_slot import TimeSlot


@attrs.define
class Reservation:
    student_id: int
    book_id: int
    table_id: int
    seat_number: int
    reserved_date: date
    time_slot: TimeSlot
    status: ReservationStatus = ReservationStatus.PENDING
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        student_id: int,
        book_id: int,
        table_id: int,
        seat_number: int,
        reserved_date: date,
        time_slot: TimeSlot,
        now: datetime,
    ) -> 'Reservation':
        """Build a PENDING reservation from an already validated candidate."""
        return cls(
            student_id=student_id,
            book_id=book_id,
            table_id=table_id,
            seat_number=seat_number,
            reserved_date=reserved_date,
            time_slot=time_slot,
            status=ReservationStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_blocking(self) -> bool:
        return ReservationLifecycle.is_blocking(self.status)

    def occupies_same_seat_and_day(self, *, table_id: int, seat_number: int, day: date) -> bool:
        return (
            self.table_id == table_id
            and self.seat_number == seat_number
            and self.reserved_date == day
        )

    @Logger.io
    def decide(self, target: str | ReservationStatus, *, now: datetime) -> 'Reservation':
        """
        Apply an administrator decision.

        Raises:
            InvalidStatusError: target outside APPROVED / DENIED / WAITLISTED
            InvalidStateError: reservation is no longer PENDING
        """
        new_status = ReservationLifecycle.transition(self.status, target)
        return attrs.evolve(self, status=new_status, updated_at=now)
