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
from src.service.library.domain.entity.reservation_entity import Reservation
from src.service.library.domain.enum.reservation_status import ReservationStatus
from src.service.library.domain.lifecycle.reservation_lifecycle import ReservationLifecycle


class DecideReservationUseCase:
    """
    Administrator approves, denies or waitlists a PENDING reservation.

    The status write is a compare-and-swap on PENDING, so of two concurrent
    decisions exactly one wins and the other gets InvalidStateError.
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
        self, *, reservation_id: int, target_status: str | ReservationStatus
    ) -> Reservation:
        with self.tracer.start_as_current_span(
            'use_case.decide_reservation',
            attributes={'reservation.id': reservation_id, 'target.status': str(target_status)},
        ):
            target = ReservationLifecycle.parse_target(target_status)

            async with self.uow:
                reservation = await self.uow.reservation_repo.get_by_id(
                    reservation_id=reservation_id
                )
                if not reservation:
                    raise NotFoundError('Reservation not found')

                decided = reservation.decide(target, now=self.clock.now())
                updated = await self.uow.reservation_repo.update_status(
                    reservation=decided, expected_status=reservation.status
                )
                if not updated:
                    raise InvalidStateError(
                        'Reservation was already decided; only PENDING can be decided'
                    )
                await self.uow.commit()

            metrics.record_reservation_decision(status=updated.status.value)
            Logger.base.info(f'📝 [DECIDE] Reservation {reservation_id} -> {updated.status}')
            return updated
