from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import InvalidStateError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.library_metrics import metrics
from src.service.library.app.interface.i_clock import IClock
from src.service.library.app.service.book_availability_projection import (
    BookAvailabilityProjection,
)
from src.service.library.domain.entity.borrow_request_entity import BorrowRequest
from src.service.library.domain.enum.borrow_request_status import BorrowRequestStatus
from src.service.library.domain.lifecycle.borrow_lifecycle import BorrowLifecycle


class DecideBorrowRequestUseCase:
    """
    Administrator approves or denies a PENDING borrow request.

    Flow:
    1. Parse the target status
    2. Load the request and apply the lifecycle transition
    3. Compare-and-swap the status (expected PENDING)
    4. Project the decision onto the book (APPROVED marks it BORROWED) in the same transaction
    5. Commit once
    """

    def __init__(self, *, uow: AbstractUnitOfWork, clock: IClock) -> None:
        self.uow = uow
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        clock: IClock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(uow=uow, clock=clock)

    @Logger.io
    async def execute(
        self, *, request_id: int, target_status: str | BorrowRequestStatus
    ) -> BorrowRequest:
        with self.tracer.start_as_current_span(
            'use_case.decide_borrow_request',
            attributes={'borrow_request.id': request_id, 'target.status': str(target_status)},
        ):
            target = BorrowLifecycle.parse_target(target_status)

            async with self.uow:
                borrow_request = await self.uow.borrow_request_repo.get_by_id(
                    request_id=request_id
                )
                if not borrow_request:
                    raise NotFoundError('Borrow request not found')

                decided = borrow_request.decide(target, now=self.clock.now())
                updated = await self.uow.borrow_request_repo.update_status(
                    borrow_request=decided, expected_status=borrow_request.status
                )
                if not updated:
                    raise InvalidStateError(
                        'Borrow request was already decided; only PENDING can be decided'
                    )

                projection = BookAvailabilityProjection(book_repo=self.uow.book_repo)
                await projection.apply_decision(book_id=updated.book_id, decision=updated.status)

                await self.uow.commit()

            metrics.record_borrow_decision(status=updated.status.value)
            Logger.base.info(f'📝 [DECIDE] Borrow request {request_id} -> {updated.status}')
            return updated
