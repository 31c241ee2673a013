"""
Book availability as a consequence of borrow decisions.

This is the only place the borrow flow writes Book.availability_status.
MAINTENANCE and RESERVED are set by administrators outside this service, and
nothing here ever moves a book back to AVAILABLE (no return flow).
"""

from typing import assert_never

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.library.app.interface.i_book_repo import IBookRepo
from src.service.library.domain.entity.book_entity import Book
from src.service.library.domain.enum.availability_status import AvailabilityStatus
from src.service.library.domain.enum.borrow_request_status import BorrowRequestStatus


class BookAvailabilityProjection:
    def __init__(self, *, book_repo: IBookRepo) -> None:
        self.book_repo = book_repo

    @staticmethod
    def derive(
        current: AvailabilityStatus, decision: BorrowRequestStatus
    ) -> AvailabilityStatus:
        match decision:
            case BorrowRequestStatus.APPROVED:
                return AvailabilityStatus.BORROWED
            case BorrowRequestStatus.DENIED | BorrowRequestStatus.PENDING:
                return current
            case _:
                assert_never(decision)

    @Logger.io
    async def apply_decision(self, *, book_id: int, decision: BorrowRequestStatus) -> Book:
        book = await self.book_repo.get_by_id(book_id=book_id)
        if not book:
            raise NotFoundError('Book not found')

        target = self.derive(book.availability_status, decision)
        if target == book.availability_status:
            return book
        return await self.mark_borrowed(book_id=book_id)

    @Logger.io
    async def mark_borrowed(self, *, book_id: int) -> Book:
        book = await self.book_repo.update_availability(
            book_id=book_id, availability_status=AvailabilityStatus.BORROWED
        )
        if not book:
            raise NotFoundError('Book not found')
        return book
