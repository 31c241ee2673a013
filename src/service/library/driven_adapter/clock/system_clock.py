from datetime import date, datetime

from src.service.library.app.interface.i_clock import IClock


class SystemClock(IClock):
    """Local wall clock. Reservation dates and times are naive local values."""

    def now(self) -> datetime:
        return datetime.now().astimezone()

    def today(self) -> date:
        return date.today()
