"""
Unit of Work Pattern - one database session and transaction per request

Architecture:
- UoW owns the session lifecycle
- UoW owns commit/rollback
- Repositories share the UoW session
- Use cases coordinate several repositories through one UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.db_setting import get_async_session


if TYPE_CHECKING:
    from src.service.library.app.interface.i_book_repo import IBookRepo
    from src.service.library.app.interface.i_borrow_request_repo import IBorrowRequestRepo
    from src.service.library.app.interface.i_reservation_repo import IReservationRepo
    from src.service.library.app.interface.i_table_repo import ITableRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for the library service

    Leaving the context without commit() rolls back, so every use case is
    all-or-nothing.

    Usage:
        async with uow:
            reservation = await uow.reservation_repo.create(...)
            await uow.commit()
    """

    table_repo: ITableRepo
    book_repo: IBookRepo
    reservation_repo: IReservationRepo
    borrow_request_repo: IBorrowRequestRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        from src.service.library.driven_adapter.repo.book_repo_impl import BookRepoImpl
        from src.service.library.driven_adapter.repo.borrow_request_repo_impl import (
            BorrowRequestRepoImpl,
        )
        from src.service.library.driven_adapter.repo.reservation_repo_impl import (
            ReservationRepoImpl,
        )
        from src.service.library.driven_adapter.repo.table_repo_impl import TableRepoImpl

        # Repositories share the request session
        self.table_repo = TableRepoImpl(self.session)
        self.book_repo = BookRepoImpl(self.session)
        self.reservation_repo = ReservationRepoImpl(self.session)
        self.borrow_request_repo = BorrowRequestRepoImpl(self.session)

        return await super().__aenter__()

    async def __aexit__(self, *args):
        await super().__aexit__(*args)
        # Note: session cleanup handled by get_async_session context manager

    async def _commit(self):
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


def get_unit_of_work(
    session: AsyncSession = Depends(get_async_session),
) -> AbstractUnitOfWork:
    """
    FastAPI dependency for Unit of Work

    Usage:
        async def submit(uow: AbstractUnitOfWork = Depends(get_unit_of_work)):
            async with uow:
                reservation = await uow.reservation_repo.create(...)
                await uow.commit()
    """
    return SqlAlchemyUnitOfWork(session)
