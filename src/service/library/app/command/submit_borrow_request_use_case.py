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
from src.service.library.domain.entity.borrow_request_entity import BorrowRequest


class SubmitBorrowRequestUseCase:
    """
    Student asks to borrow a book.

    The book row is locked for the whole check-then-insert, so availability and
    the duplicate PENDING check see the same state the insert commits against.
    The window is fixed: today until today + BORROW_WINDOW_DAYS.
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
    async def execute(self, *, student_id: int, book_id: int) -> BorrowRequest:
        with self.tracer.start_as_current_span(
            'use_case.submit_borrow_request',
            attributes={'student.id': student_id, 'book.id': book_id},
        ):
            async with self.uow:
                book = await self.uow.book_repo.get_by_id_for_update(book_id=book_id)
                if not book:
                    raise NotFoundError('Book not found')

                if not book.is_available:
                    metrics.record_borrow_submission(result='rejected')
                    raise ConflictError('Book is not available for borrowing')

                pending = await self.uow.borrow_request_repo.find_pending(
                    student_id=student_id, book_id=book_id
                )
                if pending:
                    metrics.record_borrow_submission(result='rejected')
                    raise ConflictError('You already have a pending request for this book')

                borrow_request = BorrowRequest.create(
                    student_id=student_id,
                    book_id=book_id,
                    today=self.clock.today(),
                    now=self.clock.now(),
                    window_days=self.settings.BORROW_WINDOW_DAYS,
                    max_span_days=self.settings.BORROW_MAX_SPAN_DAYS,
                )
                try:
                    created = await self.uow.borrow_request_repo.create(
                        borrow_request=borrow_request
                    )
                except ConflictError:
                    metrics.record_borrow_submission(result='rejected')
                    raise
                await self.uow.commit()

            metrics.record_borrow_submission(result='accepted')
            Logger.base.info(
                f'📚 [BORROW] Request {created.id} PENDING for student {student_id}, book {book_id} '
                f'({created.requested_from_date} -> {created.requested_to_date})'
            )
            return created
