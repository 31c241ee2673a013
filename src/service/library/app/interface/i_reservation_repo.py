from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from src.service.library.domain.entity.reservation_entity import Reservation
from src.service.library.domain.enum.reservation_status import ReservationStatus


class IReservationRepo(ABC):
    """
    Repository interface for seat reservations.

    Responsibilities:
    - Persist new PENDING reservations
    - Read blocking reservations for a seat and day (conflict check)
    - Compare-and-swap status decisions
    """

    @abstractmethod
    async def create(self, *, reservation: Reservation) -> Reservation:
        """
        Insert a reservation.

        Raises:
            ConflictError: a blocking reservation with the identical seat and slot exists
        """
        pass

    @abstractmethod
    async def get_by_id(self, *, reservation_id: int) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def list_blocking_for_seat(
        self, *, table_id: int, seat_number: int, reserved_date: date
    ) -> List[Reservation]:
        """PENDING and APPROVED reservations on one seat and day"""
        pass

    @abstractmethod
    async def list_by_filter(
        self,
        *,
        status: Optional[ReservationStatus] = None,
        student_id: Optional[int] = None,
    ) -> List[Reservation]:
        """Newest first"""
        pass

    @abstractmethod
    async def update_status(
        self, *, reservation: Reservation, expected_status: ReservationStatus
    ) -> Optional[Reservation]:
        """
        Persist reservation.status only if the stored status still equals expected_status.

        Returns:
            Updated reservation, or None when the stored status no longer matches
        """
        pass
