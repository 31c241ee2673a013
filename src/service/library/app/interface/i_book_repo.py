from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from src.service.library.domain.entity.book_entity import Book
from src.service.library.domain.enum.availability_status import AvailabilityStatus


class IBookRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, book_id: int) -> Optional[Book]:
        pass

    @abstractmethod
    async def list_by_ids(self, *, book_ids: Iterable[int]) -> List[Book]:
        """Books for display next to reservations and requests; unknown ids are skipped"""
        pass

    @abstractmethod
    async def get_by_id_for_update(self, *, book_id: int) -> Optional[Book]:
        """Row-locking read, held until commit or rollback"""
        pass

    @abstractmethod
    async def update_availability(
        self, *, book_id: int, availability_status: AvailabilityStatus
    ) -> Optional[Book]:
        """
        Overwrite the availability status of a book.

        Returns:
            Updated book, or None when the book does not exist
        """
        pass
