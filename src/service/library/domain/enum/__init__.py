from src.service.library.domain.enum.availability_status import AvailabilityStatus
from src.service.library.domain.enum.borrow_request_status import BorrowRequestStatus
from src.service.library.domain.enum.reservation_status import ReservationStatus


__all__ = ['AvailabilityStatus', 'BorrowRequestStatus', 'ReservationStatus']
