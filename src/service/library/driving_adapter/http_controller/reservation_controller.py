from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.library.app.command.decide_reservation_use_case import DecideReservationUseCase
from src.service.library.app.command.submit_reservation_use_case import SubmitReservationUseCase
from src.service.library.app.query.get_reservation_conflicts_use_case import (
    GetReservationConflictsUseCase,
)
from src.service.library.app.query.list_reservations_use_case import ListReservationsUseCase
from src.service.library.domain.entity.actor_entity import ActorEntity
from src.service.library.driving_adapter.http_controller.auth.actor_auth import (
    require_admin,
    require_student,
)
from src.service.library.driving_adapter.http_controller.schema.reservation_schema import (
    ReservationConflictsResponse,
    ReservationCreateRequest,
    ReservationResponse,
    ReservationStatusUpdateRequest,
    ReservationWithDetailsResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def submit_reservation(
    request: ReservationCreateRequest,
    current_actor: ActorEntity = Depends(require_student),
    use_case: SubmitReservationUseCase = Depends(SubmitReservationUseCase.depends),
) -> ReservationResponse:
    with tracer.start_as_current_span('controller.submit_reservation') as span:
        span.set_attribute('table_id', request.table_id)
        span.set_attribute('seat_number', request.seat_number)
        span.set_attribute('student_id', current_actor.id)

        reservation = await use_case.execute(
            student_id=current_actor.id,
            book_id=request.book_id,
            table_id=request.table_id,
            seat_number=request.seat_number,
            reserved_date=request.reserved_date,
            start_time=request.start_time,
            end_time=request.end_time,
        )
        return ReservationResponse.from_entity(reservation)


@router.get('', response_model=List[ReservationWithDetailsResponse])
@Logger.io
async def list_reservations(
    status_filter: Optional[str] = Query(default=None, alias='status'),
    current_actor: ActorEntity = Depends(require_admin),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationWithDetailsResponse]:
    reservations = await use_case.list_reservations(status=status_filter)
    return [ReservationWithDetailsResponse.from_details(r) for r in reservations]


@router.get('/my', response_model=List[ReservationWithDetailsResponse])
@Logger.io
async def list_my_reservations(
    current_actor: ActorEntity = Depends(require_student),
    use_case: ListReservationsUseCase = Depends(ListReservationsUseCase.depends),
) -> List[ReservationWithDetailsResponse]:
    reservations = await use_case.list_student_reservations(student_id=current_actor.id)
    return [ReservationWithDetailsResponse.from_details(r) for r in reservations]


@router.patch('/{reservation_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def decide_reservation(
    reservation_id: int,
    request: ReservationStatusUpdateRequest,
    current_actor: ActorEntity = Depends(require_admin),
    use_case: DecideReservationUseCase = Depends(DecideReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.execute(
        reservation_id=reservation_id, target_status=request.status
    )
    return ReservationResponse.from_entity(reservation)


@router.get('/{reservation_id}/conflicts')
@Logger.io
async def get_reservation_conflicts(
    reservation_id: int,
    current_actor: ActorEntity = Depends(require_admin),
    use_case: GetReservationConflictsUseCase = Depends(GetReservationConflictsUseCase.depends),
) -> ReservationConflictsResponse:
    conflicts = await use_case.execute(reservation_id=reservation_id)
    return ReservationConflictsResponse(
        reservation_id=reservation_id,
        conflicts=[ReservationResponse.from_entity(r) for r in conflicts],
    )
