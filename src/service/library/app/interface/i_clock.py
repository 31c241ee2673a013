from abc import ABC, abstractmethod
from datetime import date, datetime


class IClock(ABC):
    """Source of "now" and "today" for date rules (past-date checks, borrow window)"""

    @abstractmethod
    def now(self) -> datetime:
        pass

    @abstractmethod
    def today(self) -> date:
        pass
