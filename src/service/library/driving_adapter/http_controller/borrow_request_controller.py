from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.library.app.command.decide_borrow_request_use_case import (
    DecideBorrowRequestUseCase,
)
from src.service.library.app.command.submit_borrow_request_use_case import (
    SubmitBorrowRequestUseCase,
)
from src.service.library.app.query.list_borrow_requests_use_case import (
    ListBorrowRequestsUseCase,
)
from src.service.library.domain.entity.actor_entity import ActorEntity
from src.service.library.driving_adapter.http_controller.auth.actor_auth import (
    require_admin,
    require_student,
)
from src.service.library.driving_adapter.http_controller.schema.borrow_request_schema import (
    BorrowRequestCreateRequest,
    BorrowRequestResponse,
    BorrowRequestStatusUpdateRequest,
    BorrowRequestWithDetailsResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def submit_borrow_request(
    request: BorrowRequestCreateRequest,
    current_actor: ActorEntity = Depends(require_student),
    use_case: SubmitBorrowRequestUseCase = Depends(SubmitBorrowRequestUseCase.depends),
) -> BorrowRequestResponse:
    with tracer.start_as_current_span('controller.submit_borrow_request') as span:
        span.set_attribute('book_id', request.book_id)
        span.set_attribute('student_id', current_actor.id)

        borrow_request = await use_case.execute(
            student_id=current_actor.id, book_id=request.book_id
        )
        return BorrowRequestResponse.from_entity(borrow_request)


@router.get('', response_model=List[BorrowRequestWithDetailsResponse])
@Logger.io
async def list_borrow_requests(
    status_filter: Optional[str] = Query(default=None, alias='status'),
    current_actor: ActorEntity = Depends(require_admin),
    use_case: ListBorrowRequestsUseCase = Depends(ListBorrowRequestsUseCase.depends),
) -> List[BorrowRequestWithDetailsResponse]:
    borrow_requests = await use_case.list_borrow_requests(status=status_filter)
    return [BorrowRequestWithDetailsResponse.from_details(r) for r in borrow_requests]


@router.get('/my', response_model=List[BorrowRequestWithDetailsResponse])
@Logger.io
async def list_my_borrow_requests(
    current_actor: ActorEntity = Depends(require_student),
    use_case: ListBorrowRequestsUseCase = Depends(ListBorrowRequestsUseCase.depends),
) -> List[BorrowRequestWithDetailsResponse]:
    borrow_requests = await use_case.list_student_borrow_requests(student_id=current_actor.id)
    return [BorrowRequestWithDetailsResponse.from_details(r) for r in borrow_requests]


@router.patch('/{request_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def decide_borrow_request(
    request_id: int,
    request: BorrowRequestStatusUpdateRequest,
    current_actor: ActorEntity = Depends(require_admin),
    use_case: DecideBorrowRequestUseCase = Depends(DecideBorrowRequestUseCase.depends),
) -> BorrowRequestResponse:
    borrow_request = await use_case.execute(request_id=request_id, target_status=request.status)
    return BorrowRequestResponse.from_entity(borrow_request)
