from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel

from src.service.library.app.query.details_read_model import ReservationDetails
from src.service.library.domain.entity.reservation_entity import Reservation


class ReservationCreateRequest(BaseModel):
    book_id: int
    table_id: int
    seat_number: int
    reserved_date: date
    start_time: str  # HH:MM, 24-hour
    end_time: str

    class Config:
        json_schema_extra = {
            'example': {
                'book_id': 1,
                'table_id': 1,
                'seat_number': 1,
                'reserved_date': '2024-01-15',
                'start_time': '09:00',
                'end_time': '11:00',
            }
        }


class ReservationStatusUpdateRequest(BaseModel):
    status: str

    class Config:
        json_schema_extra = {'example': {'status': 'APPROVED'}}


class ReservationResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 1,
                'student_id': 2,
                'book_id': 1,
                'table_id': 1,
                'seat_number': 1,
                'reserved_date': '2024-01-15',
                'start_time': '09:00',
                'end_time': '11:00',
                'status': 'PENDING',
                'created_at': '2024-01-10T10:30:00',
                'updated_at': '2024-01-10T10:30:00',
            }
        },
    }

    id: int
    student_id: int
    book_id: int
    table_id: int
    seat_number: int
    reserved_date: date
    start_time: str
    end_time: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, reservation: Reservation) -> 'ReservationResponse':
        if reservation.id is None:
            raise ValueError('Reservation ID should not be None after persistence.')
        return cls(
            id=reservation.id,
            student_id=reservation.student_id,
            book_id=reservation.book_id,
            table_id=reservation.table_id,
            seat_number=reservation.seat_number,
            reserved_date=reservation.reserved_date,
            start_time=f'{reservation.time_slot.start_time:%H:%M}',
            end_time=f'{reservation.time_slot.end_time:%H:%M}',
            status=reservation.status.value,
            created_at=reservation.created_at,
            updated_at=reservation.updated_at,
        )


class ReservationConflictsResponse(BaseModel):
    reservation_id: int
    conflicts: List[ReservationResponse]


class ReservationWithDetailsResponse(ReservationResponse):
    book_title: Optional[str] = None
    book_author: Optional[str] = None
    table_label: Optional[str] = None

    @classmethod
    def from_details(cls, details: ReservationDetails) -> 'ReservationWithDetailsResponse':
        return cls(
            **ReservationResponse.from_entity(details.reservation).model_dump(),
            book_title=details.book_title,
            book_author=details.book_author,
            table_label=details.table_label,
        )
