from datetime import date
from typing import List, Optional

from sqlalchemy import select, update as sql_update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.library.app.interface.i_reservation_repo import IReservationRepo
from src.service.library.domain.entity.reservation_entity import Reservation
from src.service.library.domain.enum.reservation_status import ReservationStatus
from src.service.library.domain.lifecycle.reservation_lifecycle import BLOCKING_STATUSES
from src.service.library.domain.value_object.time_slot import TimeSlot
from src.service.library.driven_adapter.model.reservation_model import ReservationModel


BLOCKING_SLOT_INDEX = 'uq_reservation_blocking_slot'


class ReservationRepoImpl(IReservationRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_reservation: ReservationModel) -> Reservation:
        return Reservation(
            student_id=db_reservation.student_id,
            book_id=db_reservation.book_id,
            table_id=db_reservation.table_id,
            seat_number=db_reservation.seat_number,
            reserved_date=db_reservation.reserved_date,
            time_slot=TimeSlot(
                start_time=db_reservation.start_time, end_time=db_reservation.end_time
            ),
            status=ReservationStatus(db_reservation.status),
            id=db_reservation.id,
            created_at=db_reservation.created_at,
            updated_at=db_reservation.updated_at,
        )

    @Logger.io
    async def create(self, *, reservation: Reservation) -> Reservation:
        db_reservation = ReservationModel(
            student_id=reservation.student_id,
            book_id=reservation.book_id,
            table_id=reservation.table_id,
            seat_number=reservation.seat_number,
            reserved_date=reservation.reserved_date,
            start_time=reservation.time_slot.start_time,
            end_time=reservation.time_slot.end_time,
            status=reservation.status.value,
            created_at=reservation.created_at,
            updated_at=reservation.updated_at,
        )
        self.session.add(db_reservation)
        try:
            await self.session.flush()
        except IntegrityError as e:
            if BLOCKING_SLOT_INDEX in str(e.orig):
                raise ConflictError('Slot already reserved') from e
            raise
        await self.session.refresh(db_reservation)

        return ReservationRepoImpl._to_entity(db_reservation)

    @Logger.io
    async def get_by_id(self, *, reservation_id: int) -> Optional[Reservation]:
        result = await self.session.execute(
            select(ReservationModel).where(ReservationModel.id == reservation_id)
        )
        db_reservation = result.scalar_one_or_none()
        return ReservationRepoImpl._to_entity(db_reservation) if db_reservation else None

    @Logger.io
    async def list_blocking_for_seat(
        self, *, table_id: int, seat_number: int, reserved_date: date
    ) -> List[Reservation]:
        result = await self.session.execute(
            select(ReservationModel)
            .where(ReservationModel.table_id == table_id)
            .where(ReservationModel.seat_number == seat_number)
            .where(ReservationModel.reserved_date == reserved_date)
            .where(ReservationModel.status.in_([s.value for s in BLOCKING_STATUSES]))
            .order_by(ReservationModel.start_time)
        )
        return [ReservationRepoImpl._to_entity(r) for r in result.scalars().all()]

    @Logger.io
    async def list_by_filter(
        self,
        *,
        status: Optional[ReservationStatus] = None,
        student_id: Optional[int] = None,
    ) -> List[Reservation]:
        query = select(ReservationModel)
        if status:
            query = query.where(ReservationModel.status == status.value)
        if student_id is not None:
            query = query.where(ReservationModel.student_id == student_id)

        result = await self.session.execute(
            query.order_by(ReservationModel.created_at.desc(), ReservationModel.id.desc())
        )
        return [ReservationRepoImpl._to_entity(r) for r in result.scalars().all()]

    @Logger.io
    async def update_status(
        self, *, reservation: Reservation, expected_status: ReservationStatus
    ) -> Optional[Reservation]:
        stmt = (
            sql_update(ReservationModel)
            .where(ReservationModel.id == reservation.id)
            .where(ReservationModel.status == expected_status.value)
            .values(status=reservation.status.value, updated_at=reservation.updated_at)
            .returning(ReservationModel)
        )
        result = await self.session.execute(stmt)
        db_reservation = result.scalar_one_or_none()
        return ReservationRepoImpl._to_entity(db_reservation) if db_reservation else None
