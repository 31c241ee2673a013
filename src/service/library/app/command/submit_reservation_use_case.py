from datetime import date
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.library_metrics import metrics
from src.service.library.app.interface.i_clock import IClock
from src.service.library.domain.entity.reservation_entity import Reservation
from src.service.library.domain.service.reservation_candidate import (
    validate_reservation_candidate,
)
from src.service.library.domain.service.reservation_conflict_checker import (
    ReservationConflictChecker,
)


class SubmitReservationUseCase:
    """
    Student submits a seat reservation.

    Flow:
    1. Validate the raw candidate (time slot, seat range, date), collecting every error
    2. Lock the table row so concurrent submissions for the table run one at a time
    3. Resolve seat and book
    4. Re-read blocking reservations for the seat and day, run the conflict check
    5. Insert as PENDING and commit

    The partial unique index on identical blocking slots backs step 4 at the
    storage level; a violation surfaces as ConflictError from the repo.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, clock: IClock, settings: Settings) -> None:
        self.uow = uow
        self.clock = clock
        self.settings = settings
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        clock: IClock = Depends(Provide[Container.clock]),
        settings: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(uow=uow, clock=clock, settings=settings)

    @Logger.io
    async def execute(
        self,
        *,
        student_id: int,
        book_id: int,
        table_id: int,
        seat_number: int,
        reserved_date: date,
        start_time: str,
        end_time: str,
    ) -> Reservation:
        with self.tracer.start_as_current_span(
            'use_case.submit_reservation',
            attributes={
                'student.id': student_id,
                'table.id': table_id,
                'seat.number': seat_number,
            },
        ):
            candidate = validate_reservation_candidate(
                table_id=table_id,
                seat_number=seat_number,
                reserved_date=reserved_date,
                start_time=start_time,
                end_time=end_time,
                today=self.clock.today(),
                seat_number_min=self.settings.SEAT_NUMBER_MIN,
                seat_number_max=self.settings.SEAT_NUMBER_MAX,
            )

            async with self.uow:
                table = await self.uow.table_repo.get_by_id_for_update(table_id=table_id)
                ReservationConflictChecker.ensure_seat(
                    table=table, table_id=table_id, seat_number=seat_number
                )

                book = await self.uow.book_repo.get_by_id(book_id=book_id)
                if not book:
                    raise NotFoundError('Book not found')

                existing = await self.uow.reservation_repo.list_blocking_for_seat(
                    table_id=table_id,
                    seat_number=seat_number,
                    reserved_date=candidate.reserved_date,
                )
                result = ReservationConflictChecker.check(
                    candidate=candidate, table=table, existing=existing
                )
                if not result.allowed:
                    conflict_ids = [r.id for r in result.conflicts if r.id is not None]
                    metrics.record_reservation_admission(result='rejected')
                    Logger.base.info(
                        f'⛔ [RESERVE] Seat {seat_number} at table {table_id} on '
                        f'{candidate.reserved_date} {candidate.time_slot} collides with '
                        f'{conflict_ids}'
                    )
                    raise ConflictError(
                        result.reason or 'Slot already reserved', conflicts=conflict_ids
                    )

                reservation = Reservation.create(
                    student_id=student_id,
                    book_id=book_id,
                    table_id=table_id,
                    seat_number=seat_number,
                    reserved_date=candidate.reserved_date,
                    time_slot=candidate.time_slot,
                    now=self.clock.now(),
                )
                try:
                    created = await self.uow.reservation_repo.create(reservation=reservation)
                except ConflictError:
                    metrics.record_reservation_admission(result='rejected')
                    raise
                await self.uow.commit()

            metrics.record_reservation_admission(result='allowed')
            Logger.base.info(
                f'🪑 [RESERVE] Reservation {created.id} PENDING for student {student_id}, '
                f'table {table_id} seat {seat_number} {created.reserved_date} {created.time_slot}'
            )
            return created
