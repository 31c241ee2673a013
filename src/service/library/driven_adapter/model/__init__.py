"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.library.driven_adapter.model.book_model import BookModel
from src.service.library.driven_adapter.model.borrow_request_model import BorrowRequestModel
from src.service.library.driven_adapter.model.reservation_model import ReservationModel
from src.service.library.driven_adapter.model.table_model import TableModel

__all__ = [
    'BookModel',
    'BorrowRequestModel',
    'ReservationModel',
    'TableModel',
]
