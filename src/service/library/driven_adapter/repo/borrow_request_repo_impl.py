from typing import List, Optional

from sqlalchemy import select, update as sql_update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.library.app.interface.i_borrow_request_repo import IBorrowRequestRepo
from src.service.library.domain.entity.borrow_request_entity import BorrowRequest
from src.service.library.domain.enum.borrow_request_status import BorrowRequestStatus
from src.service.library.driven_adapter.model.borrow_request_model import BorrowRequestModel


PENDING_REQUEST_INDEX = 'uq_borrow_request_pending'


class BorrowRequestRepoImpl(IBorrowRequestRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_request: BorrowRequestModel) -> BorrowRequest:
        return BorrowRequest(
            student_id=db_request.student_id,
            book_id=db_request.book_id,
            requested_from_date=db_request.requested_from_date,
            requested_to_date=db_request.requested_to_date,
            status=BorrowRequestStatus(db_request.status),
            id=db_request.id,
            created_at=db_request.created_at,
            updated_at=db_request.updated_at,
        )

    @Logger.io
    async def create(self, *, borrow_request: BorrowRequest) -> BorrowRequest:
        db_request = BorrowRequestModel(
            student_id=borrow_request.student_id,
            book_id=borrow_request.book_id,
            requested_from_date=borrow_request.requested_from_date,
            requested_to_date=borrow_request.requested_to_date,
            status=borrow_request.status.value,
            created_at=borrow_request.created_at,
            updated_at=borrow_request.updated_at,
        )
        self.session.add(db_request)
        try:
            await self.session.flush()
        except IntegrityError as e:
            if PENDING_REQUEST_INDEX in str(e.orig):
                raise ConflictError('You already have a pending request for this book') from e
            raise
        await self.session.refresh(db_request)

        return BorrowRequestRepoImpl._to_entity(db_request)

    @Logger.io
    async def get_by_id(self, *, request_id: int) -> Optional[BorrowRequest]:
        result = await self.session.execute(
            select(BorrowRequestModel).where(BorrowRequestModel.id == request_id)
        )
        db_request = result.scalar_one_or_none()
        return BorrowRequestRepoImpl._to_entity(db_request) if db_request else None

    @Logger.io
    async def find_pending(self, *, student_id: int, book_id: int) -> Optional[BorrowRequest]:
        result = await self.session.execute(
            select(BorrowRequestModel)
            .where(BorrowRequestModel.student_id == student_id)
            .where(BorrowRequestModel.book_id == book_id)
            .where(BorrowRequestModel.status == BorrowRequestStatus.PENDING.value)
        )
        db_request = result.scalars().first()
        return BorrowRequestRepoImpl._to_entity(db_request) if db_request else None

    @Logger.io
    async def list_by_filter(
        self,
        *,
        status: Optional[BorrowRequestStatus] = None,
        student_id: Optional[int] = None,
    ) -> List[BorrowRequest]:
        query = select(BorrowRequestModel)
        if status:
            query = query.where(BorrowRequestModel.status == status.value)
        if student_id is not None:
            query = query.where(BorrowRequestModel.student_id == student_id)

        result = await self.session.execute(
            query.order_by(BorrowRequestModel.created_at.desc(), BorrowRequestModel.id.desc())
        )
        return [BorrowRequestRepoImpl._to_entity(r) for r in result.scalars().all()]

    @Logger.io
    async def update_status(
        self, *, borrow_request: BorrowRequest, expected_status: BorrowRequestStatus
    ) -> Optional[BorrowRequest]:
        stmt = (
            sql_update(BorrowRequestModel)
            .where(BorrowRequestModel.id == borrow_request.id)
            .where(BorrowRequestModel.status == expected_status.value)
            .values(status=borrow_request.status.value, updated_at=borrow_request.updated_at)
            .returning(BorrowRequestModel)
        )
        result = await self.session.execute(stmt)
        db_request = result.scalar_one_or_none()
        return BorrowRequestRepoImpl._to_entity(db_request) if db_request else None
