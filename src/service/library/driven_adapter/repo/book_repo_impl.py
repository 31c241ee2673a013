from typing import Iterable, List, Optional

from sqlalchemy import select, update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.library.app.interface.i_book_repo import IBookRepo
from src.service.library.domain.entity.book_entity import Book
from src.service.library.domain.enum.availability_status import AvailabilityStatus
from src.service.library.driven_adapter.model.book_model import BookModel


class BookRepoImpl(IBookRepo):
    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_entity(db_book: BookModel) -> Book:
        return Book(
            title=db_book.title,
            author=db_book.author,
            availability_status=AvailabilityStatus(db_book.availability_status),
            id=db_book.id,
        )

    @Logger.io
    async def get_by_id(self, *, book_id: int) -> Optional[Book]:
        result = await self.session.execute(select(BookModel).where(BookModel.id == book_id))
        db_book = result.scalar_one_or_none()
        return BookRepoImpl._to_entity(db_book) if db_book else None

    @Logger.io
    async def list_by_ids(self, *, book_ids: Iterable[int]) -> List[Book]:
        ids = set(book_ids)
        if not ids:
            return []
        result = await self.session.execute(select(BookModel).where(BookModel.id.in_(ids)))
        return [BookRepoImpl._to_entity(db_book) for db_book in result.scalars().all()]

    @Logger.io
    async def get_by_id_for_update(self, *, book_id: int) -> Optional[Book]:
        result = await self.session.execute(
            select(BookModel).where(BookModel.id == book_id).with_for_update()
        )
        db_book = result.scalar_one_or_none()
        return BookRepoImpl._to_entity(db_book) if db_book else None

    @Logger.io
    async def update_availability(
        self, *, book_id: int, availability_status: AvailabilityStatus
    ) -> Optional[Book]:
        stmt = (
            sql_update(BookModel)
            .where(BookModel.id == book_id)
            .values(availability_status=availability_status.value)
            .returning(BookModel)
        )
        result = await self.session.execute(stmt)
        db_book = result.scalar_one_or_none()
        return BookRepoImpl._to_entity(db_book) if db_book else None
