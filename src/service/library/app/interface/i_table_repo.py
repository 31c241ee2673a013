from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.library.domain.entity.table_entity import Table


class ITableRepo(ABC):
    """Read-only access to study tables. Tables are managed outside this service."""

    @abstractmethod
    async def get_by_id_for_update(self, *, table_id: int) -> Optional[Table]:
        """
        Read one table and hold a row lock until the surrounding transaction ends.

        Serializes reservation submissions for one table so the conflict check and
        the insert observe the same set of reservations.
        """
        pass

    @abstractmethod
    async def list_tables(self) -> List[Table]:
        pass
