from typing import List, Optional, Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import InvalidStatusError
from src.platform.logging.loguru_io import Logger
from src.service.library.app.query.details_read_model import (
    BorrowRequestDetails,
    borrow_request_details,
)
from src.service.library.domain.entity.borrow_request_entity import BorrowRequest
from src.service.library.domain.enum.borrow_request_status import BorrowRequestStatus


class ListBorrowRequestsUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def list_borrow_requests(
        self, *, status: Optional[str] = None
    ) -> List[BorrowRequestDetails]:
        status_filter: Optional[BorrowRequestStatus] = None
        if status:
            try:
                status_filter = BorrowRequestStatus(status)
            except ValueError:
                raise InvalidStatusError(f'Invalid status: {status}')

        async with self.uow:
            borrow_requests = await self.uow.borrow_request_repo.list_by_filter(
                status=status_filter
            )
            return await self._with_details(borrow_requests)

    @Logger.io
    async def list_student_borrow_requests(
        self, *, student_id: int
    ) -> List[BorrowRequestDetails]:
        async with self.uow:
            borrow_requests = await self.uow.borrow_request_repo.list_by_filter(
                student_id=student_id
            )
            return await self._with_details(borrow_requests)

    async def _with_details(
        self, borrow_requests: List[BorrowRequest]
    ) -> List[BorrowRequestDetails]:
        books = await self.uow.book_repo.list_by_ids(
            book_ids=[r.book_id for r in borrow_requests]
        )
        return borrow_request_details(borrow_requests, books=books)
