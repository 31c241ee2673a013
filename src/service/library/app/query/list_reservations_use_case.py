from typing import List, Optional, Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import InvalidStatusError
from src.platform.logging.loguru_io import Logger
from src.service.library.app.query.details_read_model import (
    ReservationDetails,
    reservation_details,
)
from src.service.library.domain.entity.reservation_entity import Reservation
from src.service.library.domain.enum.reservation_status import ReservationStatus


class ListReservationsUseCase:
    """Reservations newest first, with book title/author and table label for display"""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def list_reservations(
        self, *, status: Optional[str] = None
    ) -> List[ReservationDetails]:
        status_filter: Optional[ReservationStatus] = None
        if status:
            try:
                status_filter = ReservationStatus(status)
            except ValueError:
                raise InvalidStatusError(f'Invalid status: {status}')

        async with self.uow:
            reservations = await self.uow.reservation_repo.list_by_filter(status=status_filter)
            return await self._with_details(reservations)

    @Logger.io
    async def list_student_reservations(self, *, student_id: int) -> List[ReservationDetails]:
        async with self.uow:
            reservations = await self.uow.reservation_repo.list_by_filter(student_id=student_id)
            return await self._with_details(reservations)

    async def _with_details(self, reservations: List[Reservation]) -> List[ReservationDetails]:
        books = await self.uow.book_repo.list_by_ids(book_ids=[r.book_id for r in reservations])
        tables = await self.uow.table_repo.list_tables()
        return reservation_details(reservations, books=books, tables=tables)
