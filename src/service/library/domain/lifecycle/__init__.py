from src.service.library.domain.lifecycle.borrow_lifecycle import BorrowLifecycle
from src.service.library.domain.lifecycle.reservation_lifecycle import ReservationLifecycle


__all__ = ['BorrowLifecycle', 'ReservationLifecycle']
