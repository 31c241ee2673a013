from datetime import date, datetime, timedelta
from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.library.domain.enum.borrow_request_status import BorrowRequestStatus
from src.service.library.domain.lifecycle.borrow_lifecycle import BorrowLifecycle


@attrs.define
class BorrowRequest:
    student_id: int
    book_id: int
    requested_from_date: date
    requested_to_date: date
    status: BorrowRequestStatus = BorrowRequestStatus.PENDING
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @staticmethod
    def validate_window(
        *, requested_from_date: date, requested_to_date: date, today: date, max_span_days: int
    ) -> None:
        errors: list[str] = []
        if requested_from_date < today:
            errors.append('Requested from date cannot be in the past')
        if requested_to_date < today:
            errors.append('Requested to date cannot be in the past')
        if requested_to_date <= requested_from_date:
            errors.append('Requested to date must be after requested from date')
        elif (requested_to_date - requested_from_date).days > max_span_days:
            errors.append(f'Borrow period cannot exceed {max_span_days} days')
        if errors:
            raise ValidationError.from_errors(errors)

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        student_id: int,
        book_id: int,
        today: date,
        now: datetime,
        window_days: int,
        max_span_days: int,
    ) -> 'BorrowRequest':
        requested_to_date = today + timedelta(days=window_days)
        cls.validate_window(
            requested_from_date=today,
            requested_to_date=requested_to_date,
            today=today,
            max_span_days=max_span_days,
        )
        return cls(
            student_id=student_id,
            book_id=book_id,
            requested_from_date=today,
            requested_to_date=requested_to_date,
            status=BorrowRequestStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_pending(self) -> bool:
        return self.status == BorrowRequestStatus.PENDING

    @Logger.io
    def decide(self, target: str | BorrowRequestStatus, *, now: datetime) -> 'BorrowRequest':
        new_status = BorrowLifecycle.transition(self.status, target)
        return attrs.evolve(self, status=new_status, updated_at=now)
