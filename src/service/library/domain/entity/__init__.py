from src.service.library.domain.entity.actor_entity import ActorEntity, ActorRole
from src.service.library.domain.entity.book_entity import Book
from src.service.library.domain.entity.borrow_request_entity import BorrowRequest
from src.service.library.domain.entity.reservation_entity import Reservation
from src.service.library.domain.entity.table_entity import Table


__all__ = ['ActorEntity', 'ActorRole', 'Book', 'BorrowRequest', 'Reservation', 'Table']
