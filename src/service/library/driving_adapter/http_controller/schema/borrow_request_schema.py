from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from src.service.library.app.query.details_read_model import BorrowRequestDetails
from src.service.library.domain.entity.borrow_request_entity import BorrowRequest


class BorrowRequestCreateRequest(BaseModel):
    book_id: int

    class Config:
        json_schema_extra = {'example': {'book_id': 1}}


class BorrowRequestStatusUpdateRequest(BaseModel):
    status: str

    class Config:
        json_schema_extra = {'example': {'status': 'APPROVED'}}


class BorrowRequestResponse(BaseModel):
    id: int
    student_id: int
    book_id: int
    requested_from_date: date
    requested_to_date: date
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, borrow_request: BorrowRequest) -> 'BorrowRequestResponse':
        if borrow_request.id is None:
            raise ValueError('Borrow request ID should not be None after persistence.')
        return cls(
            id=borrow_request.id,
            student_id=borrow_request.student_id,
            book_id=borrow_request.book_id,
            requested_from_date=borrow_request.requested_from_date,
            requested_to_date=borrow_request.requested_to_date,
            status=borrow_request.status.value,
            created_at=borrow_request.created_at,
            updated_at=borrow_request.updated_at,
        )


class BorrowRequestWithDetailsResponse(BorrowRequestResponse):
    book_title: Optional[str] = None
    book_author: Optional[str] = None

    @classmethod
    def from_details(cls, details: BorrowRequestDetails) -> 'BorrowRequestWithDetailsResponse':
        return cls(
            **BorrowRequestResponse.from_entity(details.borrow_request).model_dump(),
            book_title=details.book_title,
            book_author=details.book_author,
        )
