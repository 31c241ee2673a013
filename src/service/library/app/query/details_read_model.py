"""Records joined with the book and table fields shown in listings."""

from typing import Iterable, Optional

import attrs

from src.service.library.domain.entity.book_entity import Book
from src.service.library.domain.entity.borrow_request_entity import BorrowRequest
from src.service.library.domain.entity.reservation_entity import Reservation
from src.service.library.domain.entity.table_entity import Table


@attrs.define(frozen=True)
class ReservationDetails:
    reservation: Reservation
    book_title: Optional[str] = None
    book_author: Optional[str] = None
    table_label: Optional[str] = None


@attrs.define(frozen=True)
class BorrowRequestDetails:
    borrow_request: BorrowRequest
    book_title: Optional[str] = None
    book_author: Optional[str] = None


def reservation_details(
    reservations: Iterable[Reservation], *, books: Iterable[Book], tables: Iterable[Table]
) -> list[ReservationDetails]:
    books_by_id = {book.id: book for book in books}
    tables_by_id = {table.id: table for table in tables}
    details = []
    for reservation in reservations:
        book = books_by_id.get(reservation.book_id)
        table = tables_by_id.get(reservation.table_id)
        details.append(
            ReservationDetails(
                reservation=reservation,
                book_title=book.title if book else None,
                book_author=book.author if book else None,
                table_label=table.label if table else None,
            )
        )
    return details


def borrow_request_details(
    borrow_requests: Iterable[BorrowRequest], *, books: Iterable[Book]
) -> list[BorrowRequestDetails]:
    books_by_id = {book.id: book for book in books}
    details = []
    for borrow_request in borrow_requests:
        book = books_by_id.get(borrow_request.book_id)
        details.append(
            BorrowRequestDetails(
                borrow_request=borrow_request,
                book_title=book.title if book else None,
                book_author=book.author if book else None,
            )
        )
    return details
