from typing import List, Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.library.domain.entity.reservation_entity import Reservation
from src.service.library.domain.service.reservation_conflict_checker import (
    ReservationConflictChecker,
)


class GetReservationConflictsUseCase:
    """Blocking reservations overlapping a stored one, for the waitlist review"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, reservation_id: int) -> List[Reservation]:
        async with self.uow:
            reservation = await self.uow.reservation_repo.get_by_id(reservation_id=reservation_id)
            if not reservation:
                raise NotFoundError('Reservation not found')

            existing = await self.uow.reservation_repo.list_blocking_for_seat(
                table_id=reservation.table_id,
                seat_number=reservation.seat_number,
                reserved_date=reservation.reserved_date,
            )
            return ReservationConflictChecker.find_conflicts(reservation, existing)
