from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.library.domain.entity.borrow_request_entity import BorrowRequest
from src.service.library.domain.enum.borrow_request_status import BorrowRequestStatus


class IBorrowRequestRepo(ABC):
    @abstractmethod
    async def create(self, *, borrow_request: BorrowRequest) -> BorrowRequest:
        """
        Raises:
            ConflictError: the student already has a PENDING request for the book
        """
        pass

    @abstractmethod
    async def get_by_id(self, *, request_id: int) -> Optional[BorrowRequest]:
        pass

    @abstractmethod
    async def find_pending(self, *, student_id: int, book_id: int) -> Optional[BorrowRequest]:
        pass

    @abstractmethod
    async def list_by_filter(
        self,
        *,
        status: Optional[BorrowRequestStatus] = None,
        student_id: Optional[int] = None,
    ) -> List[BorrowRequest]:
        """Newest first"""
        pass

    @abstractmethod
    async def update_status(
        self, *, borrow_request: BorrowRequest, expected_status: BorrowRequestStatus
    ) -> Optional[BorrowRequest]:
        """Compare-and-swap on status. None when the stored status moved on."""
        pass
